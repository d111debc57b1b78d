import pytest

import tktree.widgets as _
from tktree import build, InvalidArgument, InvalidAttachment
from tktree.nodes import VBox, HBox, BorderPane, ScrollPane, LabeledBox, TabPane, Tab, Window, MenuBar, Menu
from tktree.widgets import Label, Button, MenuCommand


class TestSingleSlot:
  def test_second_write_replaces_first(self):
    pane = build(None, BorderPane)
    pane.center = _.text("X")
    x = pane.center
    pane.center = _.text("Y")
    assert pane.center["text"] == "Y"
    assert pane.childs == [pane.center]
    assert x.parent is None
    assert all(it is not x for it in pane.walk())

  def test_replaced_occupant_is_not_otherwise_mutated(self):
    clicks = []
    pane = _.scrollPane(_.vbox(_.text("inner"), _.button("b", on_click=lambda: clicks.append(1))))(None)
    old = pane.item
    pane.item = _.text("new")
    assert old.parent is None
    assert not old.isDestroyed
    assert [it.kind for it in old.childs] == ["text", "button"]
    assert old.lastChild.click()
    assert clicks == [1]

  def test_strict_policy_refuses_second_write(self):
    pane = build(None, BorderPane, slot_policy="strict")
    x = _.text("X")(pane, "top")
    with pytest.raises(InvalidAttachment):
      _.text("Y")(pane, "top")
    assert pane.top is x
    pane.top = None # explicit clear then write is fine
    assert x.parent is None
    pane.top = _.text("Z")
    assert pane.top["text"] == "Z"

  def test_unknown_region(self):
    pane = build(None, BorderPane)
    with pytest.raises(InvalidAttachment):
      _.text("m")(pane, "middle")
    assert pane.childs == []

  def test_regions_are_independent(self):
    pane = _.borderPane(top=_.text("t"), center=_.text("c"), bottom=_.text("b"))(None)
    assert [pane.slotOf(it) for it in pane.childs] == ["center", "top", "bottom"]
    assert pane.left is None and pane.right is None
    assert pane["top"]["text"] == "t"

  def test_labeled_box_and_scroll_pane_hold_one(self):
    lab = _.labeledBox("Group", _.text("a"))(None)
    assert lab["text"] == "Group"
    lab.item = _.text("b")
    assert [it["text"] for it in lab.childs] == ["b"]
    with pytest.raises(InvalidArgument):
      build(None, ScrollPane, orient="sideways")
    with pytest.raises(InvalidArgument):
      build(None, LabeledBox, "x", slot_policy="sometimes")


class TestOwnership:
  def test_reparent_detaches_from_former_owner(self):
    a = build(None, VBox)
    b = build(None, HBox)
    leaf = build(a, Label, "leaf")
    b.attach(leaf)
    assert a.childs == []
    assert b.childs == [leaf]
    assert leaf.parent is b

  def test_reattach_to_same_container_moves_to_end(self):
    box = _.vbox(_.text("a"), _.text("b"))(None)
    first = box.firstChild
    box.attach(first)
    assert [it["text"] for it in box] == ["b", "a"]

  def test_move_between_slots(self):
    pane = _.borderPane(left=_.text("x"))(None)
    x = pane.left
    pane.right = x
    assert pane.left is None and pane.right is x
    assert pane.childs == [x]

  def test_no_cycles(self):
    outer = _.vbox(_.hbox())(None)
    inner = outer.firstChild
    with pytest.raises(InvalidAttachment):
      outer.attach(outer)
    with pytest.raises(InvalidAttachment):
      inner.attach(outer)

  def test_category_mismatch(self):
    box = build(None, VBox)
    with pytest.raises(InvalidAttachment):
      box.attach(MenuCommand("Open"))
    bar = build(None, MenuBar)
    with pytest.raises(InvalidAttachment):
      bar.attach(Label("x"))
    tabs = build(None, TabPane)
    with pytest.raises(InvalidAttachment):
      _.text("not a tab")(tabs)

  def test_remove(self):
    box = _.vbox(_.text("a"), _.text("b"))(None)
    a = box.firstChild
    assert box.remove(a) is a
    assert a.parent is None and not a.isDestroyed
    with pytest.raises(InvalidAttachment):
      box.remove(a)
    b = box.firstChild
    box.removeChild(b, destroy=True)
    assert b.isDestroyed
    assert box.childs == []


class TestDestroy:
  def test_container_destroys_subtree(self):
    box = _.vbox(_.hbox(_.text("a")), _.text("b"))(None)
    nodes = list(box.walk())
    box.destroy()
    assert all(it.isDestroyed for it in nodes)

  def test_destroyed_nodes_cannot_be_attached(self):
    box = build(None, VBox)
    dead = Label("x")
    dead.destroy()
    with pytest.raises(InvalidAttachment):
      box.attach(dead)
    box.destroy()
    with pytest.raises(InvalidAttachment):
      box.attach(Label("y"))

  def test_destroy_clears_handlers(self):
    btn = Button("b", on_click=lambda: None)
    assert len(btn.handlers("click")) == 1
    btn.destroy()
    assert btn.handlers("click") == []


class TestTabs:
  def test_tabs_keep_declared_order(self):
    tabs = _.tabPane(("One", _.text("1")), _.tab("Two", _.vbox(_.text("2"))), ("Three", None))(None)
    assert tabs.titles == ["One", "Two", "Three"]
    assert tabs.tab("Two").content.kind == "vbox"
    assert tabs.tab("Three").content is None
    assert tabs.tab("Four") is None

  def test_duplicate_title(self):
    tabs = _.tabPane(("One", _.text("1")))(None)
    with pytest.raises(InvalidAttachment):
      _.tab("One")(tabs)
    assert tabs.titles == ["One"]

  def test_tab_content_replaced(self):
    page = build(None, Tab, "P")
    page.content = _.text("a")
    old = page.content
    page.content = _.text("b")
    assert old.parent is None and page.content["text"] == "b"


class TestMenusAndWindow:
  def test_menu_nesting(self):
    bar = _.menuBar(
      _.menu("File", _.menuItem("New"), _.menuSep(), _.menu("Recent", _.menuItem("a.txt"))),
      _.menu("Help", _.menuCheck("Tips", None), _.menuRadio("Mode", None, 1))
    )(None)
    (file, help) = bar.childs
    assert [it.kind for it in file.childs] == ["menuitem", "menusep", "menu"]
    assert file.lastChild.firstChild["label"] == "a.txt"
    assert [it.kind for it in help] == ["menucheck", "menuradio"]
    with pytest.raises(InvalidArgument):
      build(None, Menu, 3)

  def test_window_menu_slot(self):
    win = _.window(_.text("body"), title="Main", menu=_.menuBar(_.menu("File")))(None)
    bar = win.menu
    assert win.childs[0] is bar
    assert [it.kind for it in win.widgets] == ["text"]
    win.menu = _.menuBar()
    assert bar.parent is None
    assert win.menu is not bar
    win.menu = None
    assert win.menu is None and win.childs == win.widgets


class TestNode:
  def test_property_bag(self):
    e = Label("x", name="title", fg="red")
    e["bg"] = "blue"
    e.configure({"font": "mono"}, width=3)
    assert (e["fg"], e["bg"], e["font"], e["width"]) == ("red", "blue", "mono", 3)
    assert e.get("missing", 0) == 0
    assert "fg" in e
    del e["fg"]
    assert "fg" not in e

  def test_identity_and_path(self):
    box = _.vbox(_.text("a", name="greeting"), name="main")(None)
    leaf = box.firstChild
    assert leaf.id != box.id
    assert leaf.path == "main/greeting"
    assert leaf.root is box
    assert "Label" in repr(leaf)

  def test_name_must_be_str(self):
    with pytest.raises(InvalidArgument):
      build(None, Label, "x", name=3)

  def test_events(self):
    calls = []
    e = Label("x")
    def h(*args): calls.append(args)
    e.on("click", h).on("<Button-3>", h, "extra")
    assert e.events == ["onClick", "<Button-3>"]
    assert e.fire("click", 1)
    assert e.fire("<Button-3>", 2)
    assert calls == [(1,), ("extra", 2)]
    e.off("click", h)
    assert e.handlers("click") == []
    assert e.fire("nothing")

  def test_window_title_default(self):
    assert build(None, Window)["title"] == "App"

  def test_empty_container_is_truthy(self):
    assert build(None, Window)
    assert build(None, VBox)
    assert len(build(None, VBox)) == 0

  def test_in_looks_up_children_for_nodes(self):
    box = _.vbox(_.text("a"), pad=2)(None)
    (child, other) = (box.firstChild, Label("b"))
    assert child in box and other not in box
    assert "pad" in box
    pane = _.borderPane(top=_.text("t"))(None)
    top = pane.top
    assert top in pane
    pane.top = None
    assert top not in pane
