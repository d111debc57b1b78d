'''
tkinter side: turns a built node tree into Tk widgets ([realize]) and runs it ([TkGUI] / [TkWin]).

Common knowledges on Tk:
- pack order is useful: e.g. you have a full-size listBox with yScrollBar, then pack scrollBar first
- Tk should be singleton, use Toplevel for a new window
- Tk cannot gurantee widgets can be updated correctly from other threads, use [TkGUI.callThreadSafe] after [initLooper]
'''
import logging
import tkinter as tk
import tkinter.ttk as ttk
import tkinter.constants as kst
from tkinter import Tk, Toplevel
from tkinter import StringVar, BooleanVar, IntVar, DoubleVar
from typing import Callable, Dict, Optional

from .builder import build, give
from .looper import EventPoller
from .nodes import Node, Box, Splitter, ScrollPane, LabeledBox, BorderPane, Tab, TabPane, Window, Menu
from .nodes import HORIZONTAL, VERTICAL, BOTH
from .registry import Registry
from .utils import EventCallback, EventName, kwargsNotNull
from . import widgets as w

logger = logging.getLogger(__name__)

class BackendEnum():
  def __init__(self, name:str, module_name:str):
    self.name=name;self.module_name=module_name
  def __eq__(self, other): return isinstance(other, BackendEnum) and other.name == self.name
  def __hash__(self): return self.name.__hash__()
  def __repr__(self): return "Backend(%s)" %self.name
  def isAvaliable(self):
    try: __import__(self.module_name); return True
    except ImportError: return False
  def use(self):
    global guiBackend
    if self.isAvaliable(): guiBackend = self
    else: next(filter(BackendEnum.isAvaliable, Backend.fallbackOrder)).use()
  def isUsed(self):
    return guiBackend == self

class Backend:
  Tk = BackendEnum("tk", "tkinter")
  TTk = BackendEnum("ttk", "tkinter.ttk")
  fallbackOrder = [TTk, Tk]
guiBackend = Backend.TTk

def widgetClass(name:str):
  '''ttk class when the ttk backend is used and has one, else the classic tk one'''
  if Backend.TTk.isUsed() and hasattr(ttk, name): return getattr(ttk, name)
  return getattr(tk, name)

def _textOption(text):
  return {"textvariable": text} if isinstance(text, tk.Variable) else {"text": text}
def _variable(v): return v if isinstance(v, tk.Variable) else None

def bindYScrollBar(box, bar):
  box["yscrollcommand"] = bar.set
  bar["command"] = box.yview
def bindXScrollBar(box, bar):
  box["xscrollcommand"] = bar.set
  bar["command"] = box.xview

PACK_KEYS = ("side", "fill", "expand", "anchor", "padx", "pady")
def packArgs(e:Node, **defaults):
  '''pack() kwargs of [e], its side/fill/expand/... props win over the container defaults'''
  defaults.update({k: e.props[k] for k in PACK_KEYS if k in e.props})
  return defaults

class Realizer:
  '''one pass, node -> Tk widget; [widgets] keeps every node realized so far'''
  def __init__(self):
    self.widgets:Dict[Node, object] = {}
    self._makers:Dict[str, Callable] = {
      "text": self._text, "button": self._button, "input": self._input, "textarea": self._textarea,
      "checkbox": self._checkBox, "radiobutton": self._radioButton, "listbox": self._listBox,
      "combobox": self._comboBox, "spinbox": self._spinBox, "slider": self._slider,
      "progressbar": self._progressBar, "separator": self._separator, "canvas": self._canvas,
      "vbox": self._box, "hbox": self._box, "box": self._box, "splitter": self._splitter,
      "scrollpane": self._scrollPane, "labeledbox": self._labeledBox, "borderpane": self._borderPane,
      "tabpane": self._tabPane, "tab": self._tab, "menubar": self._menu, "menu": self._menu
    }

  def realize(self, e:Node, master):
    maker = self._makers.get(e.kind)
    if maker is None: raise TypeError("no Tk widget for %r" %e)
    wid = maker(e, master)
    options = e.get("options")
    if options: wid.configure(**options)
    for key in e.events:
      if key.startswith("<"): wid.bind(key, lambda ev, key=key: e.fire(key, ev), add="+")
    self.widgets[e] = wid
    return wid

  def _text(self, e, master): return widgetClass("Label")(master, **_textOption(e["text"]))
  def _button(self, e, master): return widgetClass("Button")(master, text=e["text"], command=e.click)
  def _input(self, e, master):
    ent = widgetClass("Entry")(master)
    ent.delete(0, kst.END)
    ent.insert(0, e["placeholder"])
    return ent
  def _textarea(self, e, master):
    text = tk.Text(master)
    if e["placeholder"] is not None: text.insert(kst.INSERT, e["placeholder"])
    if e["readonly"]: text["state"] = kst.DISABLED
    return text
  def _checkBox(self, e, master):
    return widgetClass("Checkbutton")(master, **_textOption(e["text"]), **kwargsNotNull(variable=_variable(e["dst"])),
      onvalue=e["a"], offvalue=e["b"], command=e.click)
  def _radioButton(self, e, master):
    return widgetClass("Radiobutton")(master, text=e["text"], **kwargsNotNull(variable=_variable(e["dst"])),
      value=e["value"], command=e.click)
  def _listBox(self, e, master):
    lbox = tk.Listbox(master, selectmode=(kst.BROWSE if e["mode"] == w.SINGLE else kst.EXTENDED))
    for (i, it) in enumerate(e["items"]): lbox.insert(i, it)
    return lbox
  def _comboBox(self, e, master):
    return ttk.Combobox(master, values=e["items"], **kwargsNotNull(textvariable=_variable(e["dst"])))
  def _spinBox(self, e, master):
    rng = e["range"]
    if rng.step != 1: return widgetClass("Spinbox")(master, values=tuple(rng))
    else: return widgetClass("Spinbox")(master, from_=rng.start, to=rng.stop-1)
  def _slider(self, e, master):
    rng = e["range"]
    return tk.Scale(master, from_=rng.start, to=rng[-1], resolution=rng.step, orient=e["orient"])
  def _progressBar(self, e, master):
    return ttk.Progressbar(master, orient=e["orient"], **kwargsNotNull(variable=_variable(e["dst"])))
  def _separator(self, e, master): return ttk.Separator(master, orient=e["orient"])
  def _canvas(self, e, master): return tk.Canvas(master, width=e.width, height=e.height)

  def _box(self, e:Box, master):
    frame = widgetClass("Frame")(master)
    for it in e.childs:
      if e.is_vertical: defaults = dict(side=kst.TOP, fill=kst.Y, pady=e.pad)
      else: defaults = dict(side=kst.LEFT, fill=kst.X, padx=e.pad)
      self.realize(it, frame).pack(**packArgs(it, **defaults))
    return frame
  def _splitter(self, e:Splitter, master):
    paned_win = tk.PanedWindow(master, orient=e["orient"])
    for it in e.childs: paned_win.add(self.realize(it, paned_win))
    return paned_win
  def _scrollPane(self, e:ScrollPane, master):
    frame = widgetClass("Frame")(master)
    o = e["orient"]
    item = self.realize(e.item, frame) if e.item is not None else None
    if o in (HORIZONTAL, BOTH):
      hbar = widgetClass("Scrollbar")(frame, orient=HORIZONTAL)
      hbar.pack(side=kst.BOTTOM, fill=kst.X)
      if hasattr(item, "xview"): bindXScrollBar(item, hbar)
    if o in (VERTICAL, BOTH):
      vbar = widgetClass("Scrollbar")(frame, orient=VERTICAL)
      vbar.pack(side=kst.RIGHT, fill=kst.Y)
      if hasattr(item, "yview"): bindYScrollBar(item, vbar)
    if item is not None: item.pack(**packArgs(e.item, side=kst.LEFT, fill=kst.BOTH, expand=True))
    return frame
  def _labeledBox(self, e:LabeledBox, master):
    box = widgetClass("LabelFrame")(master, text=e["text"])
    if e.item is not None: self.realize(e.item, box).pack(**packArgs(e.item))
    return box
  def _borderPane(self, e:BorderPane, master):
    frame = widgetClass("Frame")(master)
    # center goes last so the borders keep their room
    for (region, side, fill) in [("top", kst.TOP, kst.X), ("bottom", kst.BOTTOM, kst.X), ("left", kst.LEFT, kst.Y), ("right", kst.RIGHT, kst.Y)]:
      it = e[region]
      if it is not None: self.realize(it, frame).pack(**packArgs(it, side=side, fill=fill))
    if e.center is not None: self.realize(e.center, frame).pack(**packArgs(e.center, fill=kst.BOTH, expand=True))
    return frame
  def _tab(self, e:Tab, master):
    if e.content is None: return widgetClass("Frame")(master)
    return self.realize(e.content, master)
  def _tabPane(self, e:TabPane, master):
    tab = ttk.Notebook(master)
    for page in e.childs: tab.add(self.realize(page, tab), text=page.title)
    return tab
  def _menu(self, e, master):
    e_menu = tk.Menu(master, tearoff=e.get("tearoff", False))
    for it in e.childs:
      if isinstance(it, Menu): e_menu.add_cascade(label=it["label"], menu=self.realize(it, e_menu))
      elif isinstance(it, w.MenuCommand): e_menu.add_command(label=it["label"], command=it.click)
      elif isinstance(it, w.MenuSeparator): e_menu.add_separator()
      elif isinstance(it, w.MenuCheck): e_menu.add_checkbutton(label=it["label"], **kwargsNotNull(variable=_variable(it["dst"])))
      elif isinstance(it, w.MenuRadio): e_menu.add_radiobutton(label=it["label"], value=it["value"], **kwargsNotNull(variable=_variable(it["dst"])))
      else: raise TypeError("unknown menu item %r" %it)
      self.widgets[it] = e_menu
    return e_menu

  def realizeWindow(self, win:Window, toplevel):
    '''widgets of [win] are packed into a frame on [toplevel], which is returned'''
    toplevel.wm_title(win["title"])
    if win.menu is not None: toplevel["menu"] = self.realize(win.menu, toplevel)
    frame = widgetClass("Frame")(toplevel)
    for it in win.widgets: self.realize(it, frame).pack(**packArgs(it, side=kst.TOP))
    self.widgets[win] = frame
    return frame

def realize(e:Node, master):
  '''realizes [e] (and its subtree) under Tk [master], returns the widget of [e]'''
  r = Realizer()
  return r.realizeWindow(e, master) if isinstance(e, Window) else r.realize(e, master)

class BaseTkGUI:
  view:Optional[type] = None #< View type shown by the default [layout]
  def __init__(self, root, registry:Optional[Registry]=None):
    self.tk:Toplevel = root
    self.registry = registry if registry is not None else Registry()
    self.window:Optional[Window] = None
    self.ui = None #>layout
    self._realizer = Realizer()
  def layout(self):
    '''returns the curried widget (or element) of the window content'''
    if self.view is None: raise NotImplementedError("main layout")
    return self.registry.find(self.view).root
  def setup(self): pass

  def var(self, type, initial=None, var_map = {str: StringVar, bool: BooleanVar, int: IntVar, float: DoubleVar}):
    variable = var_map[type](self.tk)
    if initial is not None: variable.set(initial)
    return variable
  @property
  def shorthand(self) -> "BaseTkGUI": return self

  def build(self, title="App") -> Window:
    self.window = build(None, Window, title, configure=lambda win: give(win, self.layout()))
    return self.window
  def show(self, title="App"):
    '''builds the layout and realizes it into this window, both only once'''
    self.tk.wm_deiconify()
    if self.ui is not None: return self.ui
    win = self.window if self.window is not None else self.build(title)
    self.ui = self._realizer.realizeWindow(win, self.tk)
    self.ui.pack(fill=kst.BOTH, expand=True)
    return self.ui
  def run(self, title="App"):
    self.show(title)
    self.setup()
    self.focus(); self.tk.mainloop()
  def widgetOf(self, e:Node):
    '''the Tk widget realized for [e]'''
    return self._realizer.widgets[e]

  @property
  def title(self) -> str: return self.tk.wm_title()
  @title.setter
  def title(self, v): self.tk.wm_title(v)
  @property
  def size(self) -> tuple:
    code = self.tk.wm_geometry()
    return tuple(int(d) for d in code[0:code.index("+")].split("x"))
  def setSize(self, dim, xy=None):
    '''sets the actual size/position of window'''
    code = "x".join(str(i) for i in dim)
    if xy is not None: code += "+%d+%d" %(xy[0],xy[1])
    self.tk.wm_geometry(code)
  def setSizeBounds(self, min:tuple, max:tuple=None):
    '''set [min] to (1,1) if no limit'''
    self.tk.wm_minsize(min[0], min[1])
    if max: self.tk.wm_maxsize(max[0], max[1])
  def focus(self): self.tk.focus_set()
  def listThemes(self): return ttk.Style(self.tk).theme_names()
  @property
  def theme(self): return ttk.Style(self.tk).theme_use()
  @theme.setter
  def theme(self, v): ttk.Style(self.tk).theme_use(v)

  class Events:
    click = EventName("<Button-1>")
    doubleClick = EventName("<Double-1>")
    mouseM = EventName("<Button-2>")
    mouseR = EventName("<Button-3>")
    key = EventName("<Key>")
    enter = EventName("<Enter>"); leave = EventName("<Leave>")

class TkGUI(BaseTkGUI, EventPoller):
  root:"TkGUI" = None
  def __init__(self, registry:Optional[Registry]=None):
    super().__init__(Tk(), registry)
    EventPoller.__init__(self)
    self.on_quit = EventCallback()
    self._timer_id = None
    TkGUI.root = self
    def onQuit(ev):
      if ev.widget is self.tk: self.on_quit.run()
    self.tk.bind("<Destroy>", onQuit, add="+")
  def initLooper(self):
    '''starts draining [callThreadSafe] calls every [poll_interval_ms] on the Tk event loop'''
    assert self.isThreadMain(), "call from main thread."
    if self._timer_id is not None: return
    def poller():
      self.poll()
      self._timer_id = self.tk.after(self.poll_interval_ms, poller)
    def cancelPoller():
      if self._timer_id is not None: self.tk.after_cancel(self._timer_id)
      self._timer_id = None
    self.on_quit += cancelPoller
    poller()
  def quit(self):
    self.registry.close()
    self.tk.destroy()

class TkWin(BaseTkGUI):
  def __init__(self, registry:Optional[Registry]=None):
    assert TkGUI.root is not None, "TkGUI not initialized"
    super().__init__(Toplevel(TkGUI.root.tk), registry if registry is not None else TkGUI.root.registry)

