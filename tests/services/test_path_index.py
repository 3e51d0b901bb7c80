"""Tests for the path index."""

from page_tree.schemas.listing import EntryType
from page_tree.schemas.tree import FileNode
from page_tree.services.file_tree import build_tree
from page_tree.services.page_tree import transform_to_page_tree
from page_tree.services.path_index import PathIndex, build_path_index


def walk(nodes):
    for node in nodes:
        yield node
        yield from walk(node.children)


def test_every_file_node_is_found_by_its_path(hugo_listing):
    file_tree = build_tree(hugo_listing)
    index = PathIndex(file_tree)

    for node in walk(file_tree):
        assert index.get_node_by_path(node.path) is node
    assert len(index) == len(hugo_listing)


def test_every_page_is_found_by_its_path(hugo_listing):
    page_tree = transform_to_page_tree(build_tree(hugo_listing))
    index = PathIndex(page_tree)

    for page in walk(page_tree):
        assert index.get_node_by_path(page.path) is page


def test_pages_are_keyed_by_path_not_content_path(hugo_listing):
    index = PathIndex(transform_to_page_tree(build_tree(hugo_listing)))

    home = index.get_node_by_path("content")
    assert home is not None
    assert home.content_path == "content/_index.md"
    assert index.get_node_by_path("content/_index.md") is None
    assert "content/posts/_index.md" not in index


def test_unknown_path_returns_none(hugo_listing):
    index = PathIndex(build_tree(hugo_listing))

    assert index.get_node_by_path("content/missing.md") is None
    assert index.get_node_by_path("") is None


def test_empty_index():
    index = PathIndex()

    assert len(index) == 0
    assert index.paths() == []
    assert index.get_node_by_path("anything") is None


def test_paths_are_in_pre_order(entry):
    index = PathIndex(
        build_tree(
            [
                entry("b.md"),
                entry("a", "tree"),
                entry("a/z.md"),
                entry("a/m", "tree"),
                entry("a/m/n.md"),
            ]
        )
    )

    assert index.paths() == ["a", "a/m", "a/m/n.md", "a/z.md", "b.md"]
    assert list(index) == index.paths()
    assert "a/m" in index
    assert "a/m/missing.md" not in index


def test_first_node_wins_for_repeated_path():
    first = FileNode(name="a.md", path="a.md", type=EntryType.FILE, content_hash="1")
    second = FileNode(name="a.md", path="a.md", type=EntryType.FILE, content_hash="2")

    assert build_path_index([first, second])["a.md"] is first


def test_find_enclosing(hugo_listing):
    index = PathIndex(transform_to_page_tree(build_tree(hugo_listing)))

    posts = index.find_enclosing("content/posts/_index.md")
    assert posts is not None
    assert posts.title == "Posts"

    # Unindexed intermediate paths are skipped
    assert index.find_enclosing("content/posts/drafts/unlisted.md").path == "content/posts"
    assert index.find_enclosing("content") is None
    assert index.find_enclosing("elsewhere/page.md") is None


def test_deep_tree_does_not_recurse():
    depth = 2000
    root = FileNode(name="d0", path="d0", type=EntryType.DIRECTORY)
    parent = root
    for i in range(1, depth):
        child = FileNode(name=f"d{i}", path=f"{parent.path}/d{i}", type=EntryType.DIRECTORY)
        parent.children.append(child)
        parent = child

    index = PathIndex([root])

    assert len(index) == depth
    assert index.get_node_by_path(parent.path) is parent
