from typing import Sequence

from .builder import widget, give, by, place, current
from .nodes import Node, HBox, VBox, Splitter, ScrollPane, LabeledBox, BorderPane
from .nodes import Tab, TabPane, Window, MenuBar, Menu, MENU_ITEM, HORIZONTAL, VERTICAL, BOTH, ORIENTS
from .utils import InvalidArgument, nop

'''
MenuItems: menuItem, menuSep, menuCheck, menuRadio; menu (submenu), menuBar
Widgets(button/bar/line/box): button, radioButton; progressBar;
  slider, text; (string:)input, textarea, (number:)spinBox, (boolean:)checkBox,
  (listing:)listBox, comboBox; separator, canvas
Containers: hbox(horizontalLayout), vbox(verticalLayout); labeledBox, scrollPane,
  splitter, borderPane, tabPane/tab, window

every builder here is curried: `button("Ok")` gives a createWidget(parent, slot=None),
containers take their children as curried widgets (or plain elements) positionally.

Aux funs:
- _.by(holder, widget) / _.by(self, "name", widget) capture the built element
- _.place(widget) builds into the element being configured
'''

SINGLE, MULTIPLE = "single", "multiple"

def _requireStr(what, v):
  if not isinstance(v, str): raise InvalidArgument("%s should be str, got %r" %(what, v))
def _requireCallable(what, v):
  if not callable(v): raise InvalidArgument("%s should be callable, got %r" %(what, v))
def _requireOrient(v):
  if v not in ORIENTS: raise InvalidArgument("orient should be one of %s, got %r" %(ORIENTS, v))
def _isVariable(v): return hasattr(v, "get") and hasattr(v, "set")

class Clickable(Node):
  '''[on_click] is also registered as the "click" handler'''
  def __init__(self, name=None, on_click=nop, **props):
    _requireCallable("on_click", on_click)
    super().__init__(name, on_click=on_click, **props)
    if on_click is not nop: self.on("click", on_click)
  def click(self) -> bool: return self.fire("click")

class Label(Node):
  kind = "text"; codeName = "t"
  positional = ("text",)
  def __init__(self, text, name=None, **props):
    if not (isinstance(text, str) or _isVariable(text)): raise InvalidArgument("text should be str or variable, got %r" %(text,))
    super().__init__(name, text=text, **props)

class Button(Clickable):
  kind = "button"; codeName = "btn"
  positional = ("text",)
  def __init__(self, text, on_click=nop, name=None, **props):
    _requireStr("button text", text)
    super().__init__(name, on_click, text=text, **props)

class Input(Node):
  kind = "input"; codeName = "ent"
  def __init__(self, placeholder="", name=None, **props):
    _requireStr("placeholder", placeholder)
    super().__init__(name, placeholder=placeholder, **props)

class Textarea(Node):
  kind = "textarea"; codeName = "ta"
  def __init__(self, placeholder=None, readonly=False, name=None, **props):
    if placeholder is not None: _requireStr("placeholder", placeholder)
    super().__init__(name, placeholder=placeholder, readonly=bool(readonly), **props)

class CheckBox(Clickable):
  kind = "checkbox"; codeName = "ckbox"
  positional = ("text",)
  def __init__(self, text, dst=None, a=True, b=False, on_click=nop, name=None, **props):
    if not (isinstance(text, str) or _isVariable(text)): raise InvalidArgument("text should be str or variable, got %r" %(text,))
    super().__init__(name, on_click, text=text, dst=dst, a=a, b=b, **props)

class RadioButton(Clickable):
  kind = "radiobutton"; codeName = "rbtn"
  positional = ("text", "dst", "value")
  def __init__(self, text, dst, value, on_click=nop, name=None, **props):
    _requireStr("radio text", text)
    super().__init__(name, on_click, text=text, dst=dst, value=value, **props)

class ListBox(Node):
  kind = "listbox"; codeName = "lbox"
  positional = ("items",)
  def __init__(self, items:Sequence, mode=SINGLE, name=None, **props):
    if mode not in (SINGLE, MULTIPLE): raise InvalidArgument("listBox mode should be single/multiple, got %r" %(mode,))
    if isinstance(items, str): raise InvalidArgument("listBox items should be a sequence, got str %r" %items)
    super().__init__(name, items=list(items), mode=mode, **props)

class ComboBox(Node):
  kind = "combobox"; codeName = "cbox"
  positional = ("dst", "items")
  def __init__(self, dst, items:Sequence, name=None, **props):
    super().__init__(name, dst=dst, items=list(items), **props)

def _requireRange(what, rng):
  if not isinstance(rng, range): raise InvalidArgument("%s should be a range, got %r" %(what, rng))
  if len(rng) == 0: raise InvalidArgument("%s of empty %r" %(what, rng))

class SpinBox(Node):
  '''range(start, stop) is end-exclusive, so 1..100 is range(1,100+1)'''
  kind = "spinbox"; codeName = "spin"
  positional = ("range",)
  def __init__(self, range:range, name=None, **props):
    _requireRange("spinBox", range)
    super().__init__(name, range=range, **props)

class Slider(Node):
  kind = "slider"; codeName = "sld"
  positional = ("range",)
  def __init__(self, range:range, orient=HORIZONTAL, name=None, **props):
    _requireRange("slider", range)
    if range.step <= 0: raise InvalidArgument("slider step should be positive, got %r" %(range,))
    _requireOrient(orient)
    super().__init__(name, range=range, orient=orient, **props)

class ProgressBar(Node):
  kind = "progressbar"; codeName = "pbar"
  def __init__(self, dst=None, orient=HORIZONTAL, name=None, **props):
    _requireOrient(orient)
    super().__init__(name, dst=dst, orient=orient, **props)

class Separator(Node):
  kind = "separator"; codeName = "sep"
  def __init__(self, orient=HORIZONTAL, name=None, **props):
    _requireOrient(orient)
    super().__init__(name, orient=orient, **props)

class Canvas(Node):
  kind = "canvas"; codeName = "can"
  positional = ("dim",)
  def __init__(self, dim, name=None, **props):
    if not (isinstance(dim, tuple) and len(dim) == 2 and all(isinstance(d, int) and d >= 0 for d in dim)):
      raise InvalidArgument("canvas dim should be (width, height) ints >= 0, got %r" %(dim,))
    super().__init__(name, dim=dim, **props)
  @property
  def width(self) -> int: return self["dim"][0]
  @property
  def height(self) -> int: return self["dim"][1]

class MenuCommand(Clickable):
  kind = "menuitem"; codeName = "mi"
  category = MENU_ITEM
  positional = ("label",)
  def __init__(self, label, on_click=nop, name=None, **props):
    _requireStr("menu label", label)
    super().__init__(name, on_click, label=label, **props)
class MenuSeparator(Node):
  kind = "menusep"; codeName = "msep"
  category = MENU_ITEM
class MenuCheck(Node):
  kind = "menucheck"; codeName = "mck"
  category = MENU_ITEM
  positional = ("label", "dst")
  def __init__(self, label, dst, name=None, **props):
    _requireStr("menu label", label)
    super().__init__(name, label=label, dst=dst, **props)
class MenuRadio(Node):
  kind = "menuradio"; codeName = "mrd"
  category = MENU_ITEM
  positional = ("label", "dst", "value")
  def __init__(self, label, dst, value, name=None, **props):
    _requireStr("menu label", label)
    super().__init__(name, label=label, dst=dst, value=value, **props)

#^ element kinds v curried builders
@widget
def text(valr, **kwargs): return Label(valr, **kwargs)
@widget
def button(text, on_click=nop, **kwargs): return Button(text, on_click, **kwargs)
@widget
def input(placeholder="", **kwargs): return Input(placeholder, **kwargs)
@widget
def textarea(placeholder=None, readonly=False, **kwargs): return Textarea(placeholder, readonly, **kwargs)
@widget
def checkBox(text_valr, dst=None, a=True, b=False, on_click=nop, **kwargs):
  '''make [text_valr] and [dst] points to same if you want to change text when checked'''
  return CheckBox(text_valr, dst, a, b, on_click, **kwargs)
@widget
def radioButton(text, dst, value, on_click=nop, **kwargs): return RadioButton(text, dst, value, on_click, **kwargs)
@widget
def listBox(items, mode=SINGLE, **kwargs): return ListBox(items, mode, **kwargs)
@widget
def comboBox(dst, items, **kwargs): return ComboBox(dst, items, **kwargs)
@widget
def spinBox(range:range, **kwargs): return SpinBox(range, **kwargs)
@widget
def slider(range:range, orient=HORIZONTAL, **kwargs): return Slider(range, orient, **kwargs)
@widget
def progressBar(dst=None, orient=HORIZONTAL, **kwargs): return ProgressBar(dst, orient, **kwargs)
@widget
def separator(orient=HORIZONTAL, **kwargs): return Separator(orient, **kwargs)
@widget
def canvas(dim, **kwargs): return Canvas(dim, **kwargs)

def _withItems(items, configure, slot=None):
  '''children are built inside the configure phase, so they attach before their parent does'''
  def configureItems(e):
    for it in items:
      if it is not None: give(e, it, slot)
    configure(e)
  return configureItems
def _withSlots(slots, configure):
  def configureSlots(e):
    for (name, it) in slots:
      if it is not None: give(e, it, name)
    configure(e)
  return configureSlots

def vbox(*items, pad=5, configure=nop, **kwargs):
  return widget(VBox)(pad, configure=_withItems(items, configure), **kwargs)
def hbox(*items, pad=3, configure=nop, **kwargs):
  return widget(HBox)(pad, configure=_withItems(items, configure), **kwargs)
verticalLayout = vbox
horizontalLayout = hbox

def splitter(orient, *items, configure=nop, **kwargs):
  return widget(Splitter)(orient, configure=_withItems(items, configure), **kwargs)
def scrollPane(item=None, orient=VERTICAL, configure=nop, **kwargs):
  return widget(ScrollPane)(orient, configure=_withItems([item], configure), **kwargs)
def labeledBox(text, item=None, configure=nop, **kwargs):
  return widget(LabeledBox)(text, configure=_withItems([item], configure), **kwargs)
def borderPane(top=None, left=None, center=None, right=None, bottom=None, configure=nop, **kwargs):
  regions = [("top", top), ("left", left), ("center", center), ("right", right), ("bottom", bottom)]
  return widget(BorderPane)(configure=_withSlots(regions, configure), **kwargs)

def tab(title, content=None, configure=nop, **kwargs):
  return widget(Tab)(title, configure=_withItems([content], configure), **kwargs)
def tabPane(*entries, configure=nop, **kwargs):
  '''[entries] are tab(title, content) or (title, content) pairs'''
  tabs = [tab(*it) if isinstance(it, tuple) else it for it in entries]
  return widget(TabPane)(configure=_withItems(tabs, configure), **kwargs)

def menuItem(label, on_click=nop, **kwargs): return widget(MenuCommand)(label, on_click, **kwargs)
def menuSep(**kwargs): return widget(MenuSeparator)(**kwargs)
def menuCheck(label, dst, **kwargs): return widget(MenuCheck)(label, dst, **kwargs)
def menuRadio(label, dst, value, **kwargs): return widget(MenuRadio)(label, dst, value, **kwargs)
def menu(label, *items, configure=nop, **kwargs):
  return widget(Menu)(label, configure=_withItems(items, configure), **kwargs)
def menuBar(*items, configure=nop, **kwargs):
  return widget(MenuBar)(configure=_withItems(items, configure), **kwargs)

def window(*items, title="App", menu=None, configure=nop, **kwargs):
  '''root builder, call the result with None: window(...)(None)'''
  return widget(Window)(title, configure=_withItems([menu] + list(items), configure), **kwargs)
