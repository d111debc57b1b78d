import pytest

tk = pytest.importorskip("tkinter")

import tktree.widgets as _
from tktree import View
from tktree.ui import Backend, TkGUI, realize, widgetClass


@pytest.fixture
def tkroot():
  try: root = tk.Tk()
  except tk.TclError as ex: pytest.skip("no display: %s" %ex)
  root.withdraw()
  yield root
  root.destroy()


def test_realize_box_packs_children_in_order(tkroot):
  box = _.vbox(_.text("a"), _.button("b"), _.input("c"))(None)
  frame = realize(box, tkroot)
  kids = frame.pack_slaves()
  assert len(kids) == 3
  assert kids[0].cget("text") == "a"
  assert kids[1].cget("text") == "b"


def test_button_command_fires_click(tkroot):
  calls = []
  btn = _.button("Go", on_click=lambda: calls.append("go"))(None)
  realize(btn, tkroot).invoke()
  assert calls == ["go"]


def test_window_gets_menu_and_title(tkroot):
  win = _.window(_.text("body"), title="Hello", menu=_.menuBar(_.menu("File", _.menuItem("Quit"))))(None)
  realize(win, tkroot)
  assert tkroot.wm_title() == "Hello"
  assert tkroot["menu"] != ""


def test_widget_class_follows_backend():
  try:
    Backend.Tk.use()
    assert widgetClass("Button") is tk.Button
    Backend.TTk.use()
    from tkinter import ttk
    assert widgetClass("Button") is ttk.Button
    assert widgetClass("Listbox") is tk.Listbox
  finally:
    Backend.TTk.use()


class Greeting(View):
  def layout(self): return _.vbox(_.text("hi", name="greet"), _.button("bye"))


class App(TkGUI):
  view = Greeting


def test_gui_show_and_quit():
  try: app = App()
  except tk.TclError as ex: pytest.skip("no display: %s" %ex)
  quits = []
  app.on_quit += lambda: quits.append(1)
  app.tk.withdraw()
  app.show("Greeting")
  label = app.window.widgets[0].firstChild
  assert app.widgetOf(label).cget("text") == "hi"
  assert app.title == "Greeting"
  root = app.registry.find(Greeting).root
  app.quit()
  assert quits == [1]
  assert root.isDestroyed


class Blank(TkGUI):
  def layout(self): return []


def test_show_twice_realizes_once():
  try: app = Blank()
  except tk.TclError as ex: pytest.skip("no display: %s" %ex)
  try:
    app.tk.withdraw()
    first = app.show("Blank")
    win = app.window
    assert len(win) == 0
    assert app.show("Blank") is first
    assert app.window is win
    assert app.tk.pack_slaves() == [first]
  finally:
    app.quit()
