"""
Tests for the rendering decisions of the tree view
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import unittest
from hypothesis import given, settings

from collapse_state import build_default, expand_all, toggle
from models import DocumentNode
from tree_paths import walk_tree
from tree_renderer import (COLLAPSED_INDICATOR, EXPANDED_INDICATOR,
                           iter_visible, limit_content, render_tree,
                           strip_namespace)
from tree_strategies import document_tree_strategy, sample_tree


class TestStripNamespace(unittest.TestCase):

    def test_prefixed_name(self):
        self.assertEqual(strip_namespace("ns:Item"), "Item")

    def test_plain_name(self):
        self.assertEqual(strip_namespace("Item"), "Item")

    def test_only_first_delimiter_is_split(self):
        self.assertEqual(strip_namespace("a:b:c"), "b:c")


class TestLimitContent(unittest.TestCase):

    def test_exactly_80_characters_unchanged(self):
        text = "x" * 80
        self.assertEqual(limit_content(text), text)

    def test_81_characters_truncated(self):
        text = "y" * 81
        self.assertEqual(limit_content(text), "y" * 80 + "...")

    def test_whitespace_is_trimmed_before_measuring(self):
        text = "  " + "z" * 80 + "\n\t"
        self.assertEqual(limit_content(text), "z" * 80)

    def test_empty_and_absent(self):
        self.assertEqual(limit_content(""), "")
        self.assertEqual(limit_content(None), "")
        self.assertEqual(limit_content("   \n  "), "")


class TestRenderTree(unittest.TestCase):

    def test_leaf_document(self):
        rendered = render_tree(DocumentNode(tag="x:root", text=" hi "), "0", 0, {})
        self.assertTrue(rendered.is_leaf)
        self.assertEqual(rendered.label, "root")
        self.assertEqual(rendered.value, "hi")
        self.assertEqual(rendered.indicator, "")

    def test_sample_default_view(self):
        tree = sample_tree()
        rendered = render_tree(tree, "0", 0, build_default(tree))

        self.assertFalse(rendered.is_leaf)
        self.assertFalse(rendered.collapsed)
        self.assertEqual(rendered.indicator, EXPANDED_INDICATOR)
        self.assertEqual([c.path for c in rendered.children], ["0.0", "0.1"])

        leaf_a, header_b = rendered.children
        self.assertTrue(leaf_a.is_leaf)
        self.assertEqual((leaf_a.label, leaf_a.value), ("a", "1"))
        self.assertFalse(header_b.is_leaf)
        self.assertTrue(header_b.collapsed)
        self.assertEqual(header_b.indicator, COLLAPSED_INDICATOR)
        self.assertEqual(header_b.children, [])

    def test_clicking_b_reveals_c(self):
        tree = sample_tree()
        collapse_map = build_default(tree)
        header_b = render_tree(tree, "0", 0, collapse_map).children[1]

        collapse_map = toggle(collapse_map, header_b.path, header_b.collapsed)
        self.assertEqual(collapse_map, {"0": False, "0.1": False})

        header_b = render_tree(tree, "0", 0, collapse_map).children[1]
        self.assertFalse(header_b.collapsed)
        self.assertEqual([(c.path, c.label, c.value) for c in header_b.children],
                         [("0.1.0", "c", "2")])

    def test_collapsed_root_hides_everything(self):
        tree = sample_tree()
        rendered = render_tree(tree, "0", 0, {"0": True})
        self.assertEqual(list(iter_visible(rendered)), [rendered])

    def test_missing_entries_fall_back_to_depth(self):
        tree = sample_tree()
        rendered = render_tree(tree, "0", 0, {})
        self.assertFalse(rendered.collapsed)
        self.assertTrue(rendered.children[1].collapsed)

    def test_colliding_display_names_keep_distinct_paths(self):
        tree = DocumentNode(tag="root", children=[
            DocumentNode(tag="ns:Item", text="one"),
            DocumentNode(tag="other:Item", text="two"),
        ])
        rendered = render_tree(tree, "0", 0, {})
        self.assertEqual([c.label for c in rendered.children], ["Item", "Item"])
        self.assertEqual([c.path for c in rendered.children], ["0.0", "0.1"])

    def test_toggle_keeps_other_states(self):
        tree = DocumentNode(tag="root", children=[
            DocumentNode(tag="p", children=[DocumentNode(tag="q", text="1")]),
            DocumentNode(tag="r", children=[DocumentNode(tag="s", text="2")]),
        ])
        collapse_map = toggle(build_default(tree), "0.0", True)
        collapse_map = toggle(collapse_map, "0.1", True)
        collapse_map = toggle(collapse_map, "0.0", False)

        rendered = render_tree(tree, "0", 0, collapse_map)
        self.assertTrue(rendered.children[0].collapsed)
        self.assertFalse(rendered.children[1].collapsed)

    def test_deep_chain_renders_without_recursion(self):
        root = DocumentNode(tag="level")
        node = root
        for _ in range(1500):
            child = DocumentNode(tag="level")
            node.children.append(child)
            node = child
        node.text = "bottom"

        rendered = render_tree(root, "0", 0, expand_all(root))
        visible = list(iter_visible(rendered))
        self.assertEqual(len(visible), 1501)
        self.assertEqual(visible[-1].depth, 1500)
        self.assertTrue(visible[-1].is_leaf)
        self.assertEqual(visible[-1].value, "bottom")
        self.assertTrue(all(not item.collapsed for item in visible))

    @given(document_tree_strategy())
    @settings(max_examples=100, deadline=None)
    def test_property_expand_all_shows_every_node(self, tree):
        rendered = render_tree(tree, "0", 0, expand_all(tree))
        visible = [node.path for node in iter_visible(rendered)]
        self.assertEqual(visible, [path for _, path, _ in walk_tree(tree)])

    @given(document_tree_strategy())
    @settings(max_examples=100, deadline=None)
    def test_property_paths_match_addressing(self, tree):
        paths = {path: node for node, path, _ in walk_tree(tree)}
        rendered = render_tree(tree, "0", 0, expand_all(tree))
        for item in iter_visible(rendered):
            node = paths[item.path]
            self.assertEqual(item.is_leaf, not node.has_children)
            self.assertEqual(item.label, strip_namespace(node.tag))
            if item.is_leaf:
                self.assertLessEqual(len(item.value), 83)


if __name__ == '__main__':
    unittest.main(verbosity=2)
