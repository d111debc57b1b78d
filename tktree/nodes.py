'''
Node tree model. A [Node] has an identity, a property bag and event handler chains;
a [Container] owns an ordered child sequence and decides what it accepts, and where it goes:

- ListContainer (Box/HBox/VBox, Splitter, MenuBar, Menu, Window): ordered append / insert
- SlotContainer (ScrollPane, LabeledBox, Tab, BorderPane): named single slots,
  `slot_policy` "replace" (last write wins) or "strict" (second write is an error)
- TabPane: title-unique Tab pages

A node is owned by at most one container; attaching an owned node detaches it first.
A replaced or removed node is only detached, never disposed unless asked (`destroy=True`).
'''
import logging
from itertools import count
from typing import Dict, Iterator, List, Optional, Tuple

from .builder import give
from .utils import EventCallback, EventName, InvalidArgument, InvalidAttachment
from .utils import MSG_NOT_ACCEPTED, MSG_UNKNOWN_SLOT, MSG_SLOT_TAKEN, MSG_DESTROYED, MSG_NOT_CHILD

logger = logging.getLogger(__name__)

_nextId = count(1)

WIDGET = "widget"
MENU_ITEM = "menuitem"
MENU_BAR = "menubar"
TAB = "tab"

HORIZONTAL = "horizontal"
VERTICAL = "vertical"
BOTH = "both"
ORIENTS = (HORIZONTAL, VERTICAL)

def eventKey(event) -> str:
  return str(event) if isinstance(event, EventName) else str(EventName(str(event)))

class Node:
  kind = "node"
  category = WIDGET
  codeName = "e"
  positional:Tuple[str, ...] = () # props given positionally to the builder

  def __init__(self, name:Optional[str]=None, **props):
    if name is not None and not isinstance(name, str): raise InvalidArgument("name should be str, got %r" %(name,))
    self.id:int = next(_nextId)
    self.name = name
    self.props:dict = {}
    self.parent:"Optional[Container]" = None
    self.isDestroyed = False
    self._events:Dict[str, EventCallback] = {}
    self.configure(**props)

  def __repr__(self):
    return "%s#%d" %(type(self).__name__, self.id) + ("(%s)" %self.name if self.name else "")

  def configure(self, cnf=None, **props):
    if cnf: self.props.update(cnf)
    self.props.update(props)
    return self
  config = configure
  def __getitem__(self, key): return self.props[key]
  def __setitem__(self, key, v): self.props[key] = v
  def __delitem__(self, key): del self.props[key]
  def __contains__(self, key): return key in self.props
  def get(self, key, default=None): return self.props.get(key, default)

  def on(self, event, callback, *args):
    '''registers [callback] for [event] ("click" is "onClick", "<Button-1>" is kept as-is)'''
    self._events.setdefault(eventKey(event), EventCallback()).bind(callback, args)
    return self
  def off(self, event, callback):
    self._events[eventKey(event)].remove(callback)
  def handlers(self, event) -> list:
    chain = self._events.get(eventKey(event))
    return list(chain) if chain else []
  @property
  def events(self) -> List[str]: return [k for (k, chain) in self._events.items() if len(chain) != 0]
  def fire(self, event, *args) -> bool:
    '''runs handlers of [event] right here, the toolkit does the real dispatching'''
    chain = self._events.get(eventKey(event))
    return chain.run(*args) if chain else True

  def detach(self):
    if self.parent is not None: self.parent._release(self)
    return self
  def destroy(self):
    self.detach()
    for chain in self._events.values(): chain.clear()
    self.isDestroyed = True

  @property
  def root(self) -> "Node":
    e = self
    while e.parent is not None: e = e.parent
    return e
  @property
  def path(self) -> str:
    parts = []
    e = self
    while e is not None:
      parts.append(e.name or e.kind)
      e = e.parent
    return "/".join(reversed(parts))
  def walk(self) -> Iterator["Node"]: yield self

  def ctorArgs(self) -> Tuple[list, dict]:
    '''(args, kwargs) that rebuild this node with its builder, see codegen'''
    args = [self.props[k] for k in self.positional]
    kwargs = {k: v for (k, v) in self.props.items() if k not in self.positional}
    if self.name is not None: kwargs["name"] = self.name
    return (args, kwargs)

class Container(Node):
  accepts = frozenset([WIDGET])
  def __init__(self, name=None, **props):
    super().__init__(name, **props)

  @property
  def childs(self) -> List[Node]: raise NotImplementedError("child sequence")
  def __len__(self): return len(self.childs)
  def __bool__(self): return True # an empty container is still a node
  def __iter__(self): return iter(self.childs)
  def __contains__(self, key):
    '''a Node is looked up among the children, anything else among the props'''
    if isinstance(key, Node): return any(it is key for it in self.childs)
    return super().__contains__(key)
  @property
  def firstChild(self): return self.childs[0]
  @property
  def lastChild(self): return self.childs[-1]
  def indexOf(self, e) -> int:
    for (i, it) in enumerate(self.childs):
      if it is e: return i
    raise ValueError(MSG_NOT_CHILD %(e, self))
  def walk(self):
    yield self
    for it in self.childs: yield from it.walk()

  def _check(self, e, slot):
    if self.isDestroyed: raise InvalidAttachment(MSG_DESTROYED %self)
    if not isinstance(e, Node): raise InvalidAttachment("%r is not a Node" %(e,))
    if e.isDestroyed: raise InvalidAttachment(MSG_DESTROYED %e)
    if e.category not in self.accepts: raise InvalidAttachment(MSG_NOT_ACCEPTED %(self, e, e.category))
    anc = self
    while anc is not None:
      if anc is e: raise InvalidAttachment("attaching %r into its own subtree %r" %(e, self))
      anc = anc.parent
  def _place(self, e, slot): raise NotImplementedError("attach policy")
  def _release(self, e): raise NotImplementedError("detach policy")

  def attach(self, e, slot=None):
    '''appends/assigns [e] as child, returns it. the former owner of [e] loses it first'''
    self._check(e, slot)
    if e.parent is not None:
      logger.debug("re-parent %r: %s -> %r", e, e.parent.path, self)
      e.detach()
    self._place(e, slot)
    e.parent = self
    logger.debug("attach %r to %s", e, self.path)
    return e
  def remove(self, e, destroy=False):
    if e.parent is not self: raise InvalidAttachment(MSG_NOT_CHILD %(e, self))
    e.detach()
    if destroy: e.destroy()
    return e
  def destroy(self):
    for it in reversed(self.childs): it.destroy()
    super().destroy()

class ListContainer(Container):
  '''children in insertion order, slot is an optional insert index'''
  def __init__(self, name=None, **props):
    super().__init__(name, **props)
    self._childs:List[Node] = []
  @property
  def childs(self): return list(self._childs)
  def _place(self, e, slot):
    if slot is None: self._childs.append(e)
    elif isinstance(slot, int): self._childs.insert(slot, e)
    else: raise InvalidAttachment("%r takes index slots, got %r" %(self, slot))
  def _release(self, e):
    self._childs.remove(e)
    e.parent = None
    logger.debug("detach %r from %s", e, self.path)

  def insert(self, index:int, e_ctor): return give(self, e_ctor, index)
  def appendChild(self, e_ctor):
    '''accepts curried widget, element, or list of those'''
    return give(self, e_ctor)
  def removeChild(self, e, destroy=False): return self.remove(e, destroy)
  def clear(self, destroy=False):
    for it in self.childs: self.remove(it, destroy)
  def ctorArgs(self):
    (args, kwargs) = super().ctorArgs()
    return (args + self.childs, kwargs)

class Box(ListContainer):
  kind = "box"
  def __init__(self, pad=0, is_vertical=True, name=None, **props):
    if not isinstance(pad, int) or pad < 0: raise InvalidArgument("pad should be int >= 0, got %r" %(pad,))
    super().__init__(name, pad=pad, **props)
    self.is_vertical = is_vertical
  @property
  def pad(self) -> int: return self["pad"]
class HBox(Box):
  kind = "hbox"; codeName = "lh"
  def __init__(self, pad=3, name=None, **props):
    super().__init__(pad, False, name, **props)
class VBox(Box):
  kind = "vbox"; codeName = "lv"
  def __init__(self, pad=5, name=None, **props):
    super().__init__(pad, True, name, **props)

class Splitter(ListContainer):
  kind = "splitter"; codeName = "spl"
  positional = ("orient",)
  def __init__(self, orient=HORIZONTAL, name=None, **props):
    if orient not in ORIENTS: raise InvalidArgument("orient should be one of %s, got %r" %(ORIENTS, orient))
    super().__init__(name, orient=orient, **props)

class SlotContainer(Container):
  '''named single-occupant slots, slot=None means the first one'''
  slots:Tuple[str, ...] = ("item",)
  SLOT_POLICIES = ("replace", "strict")
  def __init__(self, name=None, slot_policy="replace", **props):
    if slot_policy not in SlotContainer.SLOT_POLICIES: raise InvalidArgument("unknown slot_policy %r" %(slot_policy,))
    super().__init__(name, **props)
    self.slot_policy = slot_policy
    self._slots:Dict[str, Node] = {}
  @property
  def childs(self): return [self._slots[k] for k in self.slots if k in self._slots]
  def _slotName(self, slot) -> str:
    name = self.slots[0] if slot is None else slot
    if name not in self.slots: raise InvalidAttachment(MSG_UNKNOWN_SLOT %(self, slot, "/".join(self.slots)))
    return name
  def _check(self, e, slot):
    super()._check(e, slot)
    name = self._slotName(slot)
    old = self._slots.get(name)
    if old is not None and old is not e and self.slot_policy == "strict":
      raise InvalidAttachment(MSG_SLOT_TAKEN %(name, self, old))
  def _place(self, e, slot):
    name = self._slotName(slot)
    old = self._slots.get(name)
    if old is not None:
      old.parent = None # only detached, caller decides whether to destroy it
      logger.debug("slot %r of %s: %r replaced by %r", name, self.path, old, e)
    self._slots[name] = e
  def _release(self, e):
    for (k, it) in list(self._slots.items()):
      if it is e: del self._slots[k]
    e.parent = None
    logger.debug("detach %r from %s", e, self.path)
  def slotOf(self, e) -> Optional[str]:
    for (k, it) in self._slots.items():
      if it is e: return k
    return None
  def __getitem__(self, key):
    return self._slots.get(key) if key in self.slots else super().__getitem__(key)

  def _get(self, slot) -> Optional[Node]: return self._slots.get(slot)
  def _set(self, slot, e_ctor):
    if e_ctor is None:
      old = self._slots.get(slot)
      if old is not None: old.detach()
    else: give(self, e_ctor, slot)

  @property
  def item(self) -> Optional[Node]: return self._get(self.slots[0])
  @item.setter
  def item(self, e_ctor): self._set(self.slots[0], e_ctor)
  def ctorArgs(self):
    (args, kwargs) = super().ctorArgs()
    if self.slot_policy != "replace": kwargs["slot_policy"] = self.slot_policy
    return (args + self.childs, kwargs)

class ScrollPane(SlotContainer):
  kind = "scrollpane"; codeName = "scrolld"
  def __init__(self, orient=VERTICAL, name=None, slot_policy="replace", **props):
    if orient not in ORIENTS + (BOTH,): raise InvalidArgument("orient should be one of %s, got %r" %(ORIENTS + (BOTH,), orient))
    super().__init__(name, slot_policy, orient=orient, **props)

class LabeledBox(SlotContainer):
  kind = "labeledbox"; codeName = "labox"
  positional = ("text",)
  def __init__(self, text, name=None, slot_policy="replace", **props):
    if not isinstance(text, str): raise InvalidArgument("text should be str, got %r" %(text,))
    super().__init__(name, slot_policy, text=text, **props)

def _region(slot):
  return property(lambda self: self._get(slot), lambda self, e_ctor: self._set(slot, e_ctor), doc="%s region" %slot)

class BorderPane(SlotContainer):
  kind = "borderpane"; codeName = "bp"
  slots = ("center", "top", "bottom", "left", "right")
  top = _region("top"); bottom = _region("bottom")
  left = _region("left"); right = _region("right")
  center = _region("center")
  def __init__(self, name=None, slot_policy="replace", **props):
    super().__init__(name, slot_policy, **props)
  def ctorArgs(self):
    (args, kwargs) = Node.ctorArgs(self)
    if self.slot_policy != "replace": kwargs["slot_policy"] = self.slot_policy
    kwargs.update(self._slots)
    return (args, kwargs)

class Tab(SlotContainer):
  kind = "tab"; codeName = "pg"
  category = TAB
  slots = ("content",)
  positional = ("title",)
  def __init__(self, title, name=None, slot_policy="replace", **props):
    if not isinstance(title, str) or title == "": raise InvalidArgument("tab title should be a non-empty str, got %r" %(title,))
    super().__init__(name, slot_policy, title=title, **props)
  @property
  def title(self) -> str: return self["title"]
  content = _region("content")

class TabPane(ListContainer):
  kind = "tabpane"; codeName = "tab"
  accepts = frozenset([TAB])
  def _check(self, e, slot):
    super()._check(e, slot)
    dup = self.tab(e.title)
    if dup is not None and dup is not e: raise InvalidAttachment("%r already has a tab titled %r" %(self, e.title))
  def tab(self, title) -> Optional[Tab]:
    for it in self._childs:
      if it.title == title: return it
    return None
  @property
  def titles(self) -> List[str]: return [it.title for it in self._childs]

class Window(ListContainer):
  '''top-level root: widgets in order, plus an optional menu bar slot'''
  kind = "window"; codeName = "win"
  accepts = frozenset([WIDGET, MENU_BAR])
  def __init__(self, title="App", name=None, **props):
    super().__init__(name, title=title, **props)
    self._menu:Optional[Node] = None
  @property
  def childs(self): return ([self._menu] if self._menu is not None else []) + self._childs
  def _place(self, e, slot):
    if e.category != MENU_BAR: return super()._place(e, slot)
    if self._menu is not None:
      self._menu.parent = None
      logger.debug("menu of %s: %r replaced by %r", self.path, self._menu, e)
    self._menu = e
  def _release(self, e):
    if e is self._menu:
      self._menu = None
      e.parent = None
    else: super()._release(e)
  @property
  def menu(self): return self._menu
  @menu.setter
  def menu(self, e_ctor):
    if e_ctor is None:
      if self._menu is not None: self._menu.detach()
    else: give(self, e_ctor)
  @property
  def widgets(self) -> List[Node]: return list(self._childs)
  def ctorArgs(self):
    (args, kwargs) = Node.ctorArgs(self)
    if self._menu is not None: kwargs["menu"] = self._menu
    return (args + list(self._childs), kwargs)

class MenuBar(ListContainer):
  kind = "menubar"; codeName = "menubar"
  category = MENU_BAR
  accepts = frozenset([MENU_ITEM])

class Menu(ListContainer):
  '''cascade: a menu item that holds menu items'''
  kind = "menu"; codeName = "mnu"
  category = MENU_ITEM
  accepts = frozenset([MENU_ITEM])
  positional = ("label",)
  def __init__(self, label, name=None, **props):
    if not isinstance(label, str): raise InvalidArgument("menu label should be str, got %r" %(label,))
    super().__init__(name, label=label, **props)
