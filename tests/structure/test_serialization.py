"""
Tests for the `.tt` line format and tree files.
"""

import pytest

from treetransformer.core.tree import Tree
from treetransformer.exceptions import (
    InvalidFileExtensionError,
    InvalidIndexError,
    InvalidStructureError,
    NodeAlreadyExistsError,
    ParentNotFoundError,
)
from treetransformer.structure.serialization import (
    deserialize_tree,
    dumps,
    loads,
    read_tree_file,
    serialize_tree,
)


class TestLineFormat:
    """Test rendering and reading of the line format."""

    def test_dumps_lists_parents_breadth_first(self, sample_tree):
        assert dumps(sample_tree) == "1\n1:9,6,7\n9:8\n6:5,2\n"

    def test_dumps_empty_tree(self):
        assert dumps(Tree()) == ""

    def test_dumps_single_node(self):
        tree = Tree()
        tree.add_root(3)
        assert dumps(tree) == "3\n"

    def test_loads_round_trip(self, sample_tree, check_invariants):
        loaded = loads(dumps(sample_tree))
        assert loaded == sample_tree
        assert loaded.edges() == sample_tree.edges()
        check_invariants(loaded)

    def test_loads_tolerates_spaces_blank_lines_and_trailing_comma(self):
        tree = loads("1\n\n1: 2, 5,\n 2:3\n\n")
        expected = Tree()
        expected.add_node(1, 2)
        expected.add_node(1, 5)
        expected.add_node(2, 3)
        assert tree == expected

    def test_loads_empty_document(self):
        assert loads("").is_empty
        assert loads("\n  \n").is_empty

    def test_loads_single_node(self):
        tree = loads("8\n")
        assert tree.root.index == 8
        assert len(tree) == 1

    @pytest.mark.parametrize("text", ["x\n", "1\n1:a\n", "1\nb:2\n"])
    def test_bad_index(self, text):
        with pytest.raises(InvalidIndexError):
            loads(text)

    @pytest.mark.parametrize("text", ["1\n1-2\n", "1\n1:2:3\n", "1\n1:\n"])
    def test_malformed_line(self, text):
        with pytest.raises(InvalidStructureError):
            loads(text)

    def test_duplicate_child(self):
        with pytest.raises(NodeAlreadyExistsError):
            loads("1\n1:2,3\n3:2\n")

    def test_unknown_parent(self):
        with pytest.raises(ParentNotFoundError):
            loads("1\n1:2\n7:8\n")


class TestTreeFiles:
    """Test reading and writing tree files."""

    def test_serialize_and_deserialize(self, tmp_path, sample_tree):
        path = tmp_path / "sample.tt"
        serialize_tree(sample_tree, path)
        assert path.read_text(encoding="utf-8") == dumps(sample_tree)
        assert deserialize_tree(path) == sample_tree

    def test_empty_tree_file(self, tmp_path):
        path = tmp_path / "empty.tt"
        serialize_tree(Tree(), path)
        assert deserialize_tree(path) == Tree()

    def test_string_paths(self, tmp_path, sample_tree):
        path = str(tmp_path / "sample.tt")
        serialize_tree(sample_tree, path)
        assert deserialize_tree(path) == sample_tree

    def test_wrong_extension(self, tmp_path, sample_tree):
        with pytest.raises(InvalidFileExtensionError) as exc_info:
            serialize_tree(sample_tree, tmp_path / "sample.txt")
        assert exc_info.value.expected == ".tt"
        with pytest.raises(InvalidFileExtensionError):
            deserialize_tree(tmp_path / "incorrect1")
        assert not (tmp_path / "sample.txt").exists()

    def test_custom_extension(self, tmp_path, sample_tree):
        path = tmp_path / "sample.tree"
        serialize_tree(sample_tree, path, extension=".tree")
        assert deserialize_tree(path, extension=".tree") == sample_tree

    def test_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            deserialize_tree(tmp_path / "absent.tt")

    def test_duplicate_in_file(self, tmp_path):
        path = tmp_path / "incorrect.tt"
        path.write_text("1\n1:2,3\n2:3\n", encoding="utf-8")
        with pytest.raises(NodeAlreadyExistsError):
            deserialize_tree(path)

    def test_read_edge_list_file_joins_lines(self, tmp_path, sample_tree):
        path = tmp_path / "one.txt"
        path.write_text("[1, 9][9, 8]\n[1, 6][6, 5]\n[6, 2][1, 7]\n", encoding="utf-8")
        assert read_tree_file(path) == sample_tree

    def test_read_empty_edge_list_file(self, tmp_path):
        path = tmp_path / "empty.txt"
        path.write_text("", encoding="utf-8")
        assert read_tree_file(path).is_empty
