# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tests for traverse_down, traverse_up and bubble_up."""

from genro_arboreal import TreeNode, Visit, traverse_down


def append_some_children(tree):
    """Four children under tree, two grandchildren under the first one."""
    tree.append_child().append_child().append_child().append_child()
    tree.children[0].append_child().append_child()
    return tree


def stop_after(count, visited):
    """Callback recording ids and stopping on the count-th visit."""
    def _iterator(node):
        visited.append(node.id)
        if len(visited) == count:
            return Visit.STOP
    return _iterator


class TestTraverseDown:
    """Tests for pre-order descent."""

    def test_pre_order(self):
        """Test nodes are visited parent first, children in order."""
        tree = append_some_children(TreeNode())
        visited = []
        tree.traverse_down(lambda node: visited.append(node.id))
        assert visited == ['0', '0/0', '0/0/0', '0/0/1', '0/1', '0/2', '0/3']

    def test_iterator_mutations_visible(self):
        """Test the iterator can rewrite ids while walking."""
        tree = append_some_children(TreeNode())

        def rename(node):
            node.id = '_' + node.id

        tree.traverse_down(rename)
        assert tree.id == '_0'
        assert tree.children[0].id == '_0/0'
        assert tree.children[3].id == '_0/3'

    def test_post_iterator(self):
        """Test post_iterator runs on each child after its subtree."""
        tree = append_some_children(TreeNode())

        def pre(node):
            node.id = '_' + node.id

        def post(node):
            node.id = node.id + '='

        tree.traverse_down(pre, post)
        assert tree.id == '_0'
        assert tree.children[0].id == '_0/0='
        assert tree.children[0].children[1].id == '_0/0/1='
        assert tree.children[3].id == '_0/3='

    def test_post_order_sequence(self):
        """Test post_iterator order is children before parent."""
        tree = append_some_children(TreeNode())
        post = []
        tree.traverse_down(lambda node: None, lambda node: post.append(node.id))
        assert post == ['0/0/0', '0/0/1', '0/0', '0/1', '0/2', '0/3']

    def test_stop_on_third_visit(self):
        """Test Visit.STOP aborts the whole traversal."""
        tree = append_some_children(TreeNode())
        visited = []
        tree.traverse_down(stop_after(3, visited))
        assert visited == ['0', '0/0', '0/0/0']

    def test_stop_is_global(self):
        """Test stopping in a subtree skips later siblings of ancestors too."""
        tree = append_some_children(TreeNode())
        visited = []
        tree.traverse_down(stop_after(2, visited))
        assert visited == ['0', '0/0']

    def test_false_stops(self):
        """Test returning False aborts like Visit.STOP."""
        tree = append_some_children(TreeNode())
        visited = []

        def iterator(node):
            visited.append(node.id)
            return len(visited) < 3

        tree.traverse_down(iterator)
        assert visited == ['0', '0/0', '0/0/0']

    def test_falsy_values_continue(self):
        """Test None, 0 and empty values do not abort."""
        tree = append_some_children(TreeNode())
        for value in (None, 0, '', Visit.CONTINUE):
            visited = []
            tree.traverse_down(lambda node: visited.append(node.id) or value)
            assert len(visited) == 7

    def test_post_iterator_not_called_after_stop(self):
        """Test post_iterator stops together with the main traversal."""
        tree = append_some_children(TreeNode())
        visited, post = [], []
        tree.traverse_down(stop_after(5, visited), lambda node: post.append(node.id))
        assert visited == ['0', '0/0', '0/0/0', '0/0/1', '0/1']
        assert post == ['0/0/0', '0/0/1', '0/0']

    def test_subtree(self):
        """Test traversal starting below the root."""
        tree = append_some_children(TreeNode())
        visited = []
        tree.children[0].traverse_down(lambda node: visited.append(node.id))
        assert visited == ['0/0', '0/0/0', '0/0/1']

    def test_duplicate_ids_still_visited(self):
        """Test dedup does not rely on the id field."""
        tree = TreeNode()
        tree.append_child(node_id='x').append_child(node_id='x')
        assert len(tree.to_array()) == 3

    def test_cycle_visited_once(self):
        """Test a node reachable twice is visited once."""
        tree = TreeNode()
        tree.append_child()
        tree.children[0].children.append(tree)
        visited = []
        tree.traverse_down(lambda node: visited.append(node.id))
        assert visited == ['0', '0/0']

    def test_module_function(self):
        """Test the engine can be used without the method wrapper."""
        tree = append_some_children(TreeNode())
        visited = []
        traverse_down(tree, lambda node: visited.append(node.depth))
        assert visited == [0, 1, 2, 2, 1, 1, 1]


class TestTraverseUp:
    """Tests for level-inclusive ascent."""

    def test_root_visits_itself_and_children(self):
        """Test ascent from the root covers the root level only."""
        tree = append_some_children(TreeNode())
        visited = []
        tree.traverse_up(lambda node: visited.append(node.id))
        assert visited == ['0', '0/0', '0/1', '0/2', '0/3']

    def test_from_grandchild_covers_whole_tree(self):
        """Test ascent from a leaf visits every node exactly once."""
        tree = append_some_children(TreeNode())
        visited = []
        tree.children[0].children[1].traverse_up(lambda node: visited.append(node.id))
        assert len(visited) == len(tree)
        assert visited == ['0/0/1', '0/0', '0/0/0', '0', '0/1', '0/2', '0/3']

    def test_stop(self):
        """Test Visit.STOP aborts the ascent."""
        tree = append_some_children(TreeNode())
        visited = []
        tree.traverse_up(stop_after(3, visited))
        assert visited == ['0', '0/0', '0/1']

    def test_stop_on_ancestor(self):
        """Test stopping on an ancestor skips its children."""
        tree = append_some_children(TreeNode())
        visited = []
        tree.children[0].traverse_up(stop_after(4, visited))
        assert visited == ['0/0', '0/0/0', '0/0/1', '0']


class TestBubbleUp:
    """Tests for pure ancestor ascent."""

    def test_root_visits_itself(self):
        """Test bubbling from the root makes a single call."""
        tree = append_some_children(TreeNode())
        visited = []
        tree.bubble_up(lambda node: visited.append(node.id))
        assert visited == ['0']

    def test_from_grandchild(self):
        """Test bubbling visits the ancestor chain only."""
        tree = append_some_children(TreeNode())
        visited = []
        tree.children[0].children[1].bubble_up(lambda node: visited.append(node.id))
        assert visited == ['0/0/1', '0/0', '0']

    def test_stop(self):
        """Test Visit.STOP aborts the bubbling."""
        tree = append_some_children(TreeNode())
        visited = []
        tree.children[0].children[1].bubble_up(stop_after(2, visited))
        assert visited == ['0/0/1', '0/0']

    def test_continue_value(self):
        """Test Visit.CONTINUE keeps bubbling."""
        tree = append_some_children(TreeNode())
        visited = []

        def iterator(node):
            visited.append(node.id)
            return Visit.CONTINUE

        tree.children[0].children[0].bubble_up(iterator)
        assert visited == ['0/0/0', '0/0', '0']
