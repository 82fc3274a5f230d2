import pytest

from _html5update.exceptions import InvalidNodeError
from _html5update.nodes import TagNode, TextNode, new_tag_node
from _html5update.parser import parse_fragment


def test_add_following_sibling_tag_before_tail():
    root = parse_fragment("<a></a>b")
    root.first_child.add_following_sibling(root.new_tag_node("c"))
    assert root.serialize() == "<body><a></a><c></c>b</body>"


def test_add_following_sibling_text_before_text_sibling():
    root = parse_fragment("<a></a>c")
    root.first_child.add_following_sibling("b")
    assert root.serialize() == "<body><a></a>bc</body>"


def test_add_preceding_sibling():
    root = parse_fragment("<a></a>")

    a = root.first_child
    a.add_preceding_sibling(root.new_tag_node("z"))
    assert root.serialize() == "<body><z></z><a></a></body>"

    z = root.first_child
    z.add_preceding_sibling("x")
    assert root.serialize() == "<body>x<z></z><a></a></body>"

    z.add_preceding_sibling("y")
    assert root.serialize() == "<body>xy<z></z><a></a></body>"

    a.add_preceding_sibling(root.new_tag_node("boundary"))
    assert root.serialize() == "<body>xy<z></z><boundary></boundary><a></a></body>"


def test_add_sibling_to_root():
    root = parse_fragment("<p></p>")
    with pytest.raises(InvalidNodeError):
        root.add_following_sibling("x")
    with pytest.raises(InvalidNodeError):
        root.add_preceding_sibling("x")


def test_append_child():
    root = parse_fragment("<p></p>")
    p = root.first_child

    p.append_child(p.new_tag_node("a"), "b")
    assert p.serialize() == "<p><a></a>b</p>"

    p.append_child("c")
    assert p.serialize() == "<p><a></a>bc</p>"


def test_attributes():
    p = parse_fragment('<p id="x">a</p>').first_child

    assert p["id"] == "x"
    assert p.get("id") == "x"
    assert "id" in p
    assert p.get("title") is None
    with pytest.raises(KeyError):
        p["title"]

    p["title"] = "y"
    del p["id"]
    assert dict(p.attributes) == {"title": "y"}


def test_classes():
    p = parse_fragment('<p class=" a b  a"></p>').first_child
    assert p.classes == ("a", "b")
    assert p.has_class("b")

    p.add_class("c", "a")
    assert p["class"] == "a b c"

    p.remove_class("b")
    assert p["class"] == "a c"

    p.remove_class("a", "c")
    assert "class" not in p
    assert p.serialize() == "<p></p>"

    p.remove_class("a")
    assert "class" not in p


def test_contains_child_node():
    root = parse_fragment("<p>a<b></b></p><i></i>")
    p = root.first_child
    b = p.last_child
    assert b in p
    assert p.first_child in p
    assert root.last_child not in p


def test_css_select_yields_identical_wrappers():
    root = parse_fragment("<div><p>a</p></div>")
    p = root.css_select("p").first
    assert p is root.css_select("div > p").first
    assert p is root.first_child.first_child
    assert p.parent is root.first_child


def test_cycles_are_rejected():
    root = parse_fragment("<div><p></p></div>")
    div = root.first_child
    p = div.first_child

    with pytest.raises(InvalidNodeError):
        p.append_child(div)
    with pytest.raises(InvalidNodeError):
        p.append_child(p)
    with pytest.raises(InvalidNodeError):
        p.replace_with(div)

    assert root.serialize() == "<body><div><p></p></div></body>"


def test_detach_keeps_tail():
    root = parse_fragment("<p>a<b>b</b>c<i>d</i>e</p>")
    b = root.css_select("b").first

    assert b.detach() is b
    assert b.parent is None
    assert b.serialize() == "<b>b</b>"
    assert root.serialize() == "<body><p>ac<i>d</i>e</p></body>"

    root.css_select("i").first.detach()
    assert root.serialize() == "<body><p>ace</p></body>"


def test_detach_node_without_parent():
    root = parse_fragment("<p></p>")
    assert root.detach() is root
    with pytest.raises(InvalidNodeError):
        root.detach(retain_child_nodes=True)


def test_detach_retaining_child_nodes():
    root = parse_fragment("<p>x<a>y<b>z</b>w</a>v</p>")
    a = root.css_select("a").first

    a.detach(retain_child_nodes=True)

    assert a.parent is None
    assert a.first_child is None
    assert root.serialize() == "<body><p>xy<b>z</b>wv</p></body>"


def test_full_text():
    root = parse_fragment("<p>a<b>b<!-- c -->d</b>e</p>")
    p = root.first_child
    assert p.full_text == "abde"

    p.full_text = "x"
    assert p.serialize() == "<p>x</p>"

    p.full_text = ""
    assert p.serialize() == "<p></p>"


def test_getitem_with_index():
    p = parse_fragment("<p>a<b></b></p>").first_child
    assert isinstance(p[0], TextNode)
    assert p[0] == "a"
    assert isinstance(p[1], TagNode)
    assert len(p) == 2
    with pytest.raises(IndexError):
        p[2]


def test_index_and_root():
    root = parse_fragment("<p>a<b></b>c<i></i></p>")
    p = root.first_child
    b, i = p.css_select("b, i")

    assert p.first_child.index == 0
    assert b.index == 1
    assert p.last_child is i
    assert i.index == 3
    assert root.index is None

    assert i.root is root
    assert tuple(i.ancestors()) == (p, root)


def test_insert_child():
    root = parse_fragment("<p>ab<i></i>cd</p>")
    p = root.first_child

    p.insert_child(0, p.new_tag_node("x"))
    assert p.serialize() == "<p><x></x>ab<i></i>cd</p>"

    p.insert_child(3, "!")
    assert p.serialize() == "<p><x></x>ab<i></i>!cd</p>"

    p.insert_child(2, "?", p.new_tag_node("y"))
    assert p.serialize() == "<p><x></x>ab?<y></y><i></i>!cd</p>"

    p.insert_child(len(p), p.new_tag_node("z"))
    assert p.serialize() == "<p><x></x>ab?<y></y><i></i>!cd<z></z></p>"

    with pytest.raises(IndexError):
        p.insert_child(10, "x")


def test_local_name():
    root = parse_fragment('<div class="a">b<i>c</i></div>')
    div = root.first_child
    div.local_name = "section"
    assert root.serialize() == '<body><section class="a">b<i>c</i></section></body>'


def test_move_node_from_another_tree():
    root = parse_fragment("<p></p>")
    node = new_tag_node("div", {"class": "x"})
    assert node.serialize() == '<div class="x"></div>'

    root.append_child(node)
    assert root.css_select("div").first is node
    assert node.parent is root


def test_prepend_child():
    p = parse_fragment("<p>b</p>").first_child

    p.prepend_child("a")
    assert p.serialize() == "<p>ab</p>"

    p.prepend_child(p.new_tag_node("i"))
    assert p.serialize() == "<p><i></i>ab</p>"


def test_replace_with():
    root = parse_fragment("<p>a<b>b</b>c</p>")
    b = root.css_select("b").first

    assert b.replace_with(root.new_tag_node("i")) is b
    assert b.parent is None
    assert root.serialize() == "<body><p>a<i></i>c</p></body>"


def test_replace_with_moves_attached_node():
    root = parse_fragment("<div><span>x</span>y<em>z</em></div>")
    span, em = root.css_select("span, em")

    span.replace_with(em)

    assert root.serialize() == "<body><div><em>z</em>y</div></body>"
    assert em.parent is root.first_child


def test_replace_root():
    root = parse_fragment("<p></p>")
    with pytest.raises(InvalidNodeError):
        root.replace_with(root.new_tag_node("div"))


def test_wrap_with():
    root = parse_fragment("<p>a<i>b</i>c</p>")
    i = root.css_select("i").first

    result = i.wrap_with(root.new_tag_node("b"))

    assert result.local_name == "b"
    assert i.parent is result
    assert root.serialize() == "<body><p>a<b><i>b</i></b>c</p></body>"

    with pytest.raises(InvalidNodeError):
        root.wrap_with(root.new_tag_node("div"))


def test_wrong_argument_types():
    root = parse_fragment("<p></p>")
    with pytest.raises(TypeError):
        root.append_child(1)
    with pytest.raises(TypeError):
        root.first_child.wrap_with("div")
