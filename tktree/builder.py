'''
The builder invocation: construct, configure, attach, return.

  e = build(parent, Button, "Ok", configure=lambda it: it.on("click", ok))

[widget] makes a constructor *curried* on its parent, so a tree can be written
as nested calls and given a parent later:

  tree = vbox(text("a"), button("b", on_click=nop))(window)

Inside a configure block the element under construction is also the top of a
thread-local scope stack, so [place] / [current] can be used instead of the
explicit parameter.
'''
import threading
from contextlib import contextmanager
from functools import wraps
from typing import Any, Callable, TypeVar

from .utils import InvalidArgument, InvalidAttachment, nop

E = TypeVar("E")
Configure = Callable[[Any], Any]

_scopes = threading.local()

def _stack() -> list:
  try: return _scopes.stack
  except AttributeError:
    _scopes.stack = []
    return _scopes.stack

@contextmanager
def scope(e):
  '''makes [e] the implicit receiver of [place] while the block runs'''
  stack = _stack()
  stack.append(e)
  try: yield e
  finally: stack.pop()

def current():
  '''the innermost element being configured on this thread, or None'''
  stack = _stack()
  return stack[-1] if stack else None

def construct(ctor:Callable[..., E], *args, **kwargs) -> E:
  try: return ctor(*args, **kwargs)
  except InvalidArgument: raise
  except (TypeError, ValueError) as e:
    raise InvalidArgument("cannot construct %s: %s" %(getattr(ctor, "__qualname__", ctor), e)) from e

def build(parent, ctor:Callable[..., E], *args, configure:Configure=nop, slot=None, **kwargs) -> E:
  '''
  constructs [ctor](*args, **kwargs), runs [configure] on it (nested builds attach to it),
  then attaches it to [parent] at [slot]. parent=None gives a detached root.
  '''
  e = construct(ctor, *args, **kwargs)
  with scope(e): configure(e)
  if parent is not None: parent.attach(e, slot)
  return e

def root(ctor:Callable[..., E], *args, configure:Configure=nop, **kwargs) -> E:
  return build(None, ctor, *args, configure=configure, **kwargs)

def widget(op:Callable[..., E]):
  '''make a "create" with kwargs configuration = lambda parent, slot=None: '''
  @wraps(op)
  def curry(*args, configure:Configure=nop, **kwargs):
    def createWidget(p, slot=None) -> E:
      return build(p, op, *args, configure=configure, slot=slot, **kwargs)
    createWidget.isCurried = True
    return createWidget
  return curry

def isNode(x) -> bool:
  from .nodes import Node
  return isinstance(x, Node)

def give(p, e_ctor, slot=None):
  '''
  attaches [e_ctor] to [p]: curried widget, plain `lambda p:` constructor, element, or a list of those.
  returns what got attached.
  '''
  if isinstance(e_ctor, (list, tuple)):
    return [give(p, it, slot) for it in e_ctor]
  if callable(e_ctor) and not isNode(e_ctor):
    e = e_ctor(p, slot) if getattr(e_ctor, "isCurried", False) else e_ctor(p)
    if isinstance(e, list): return [give(p, it, slot) for it in e]
    if isNode(e) and e.parent is not p: p.attach(e, slot)
    return e
  return p.attach(e_ctor, slot)

def mayGive1(value, op_obj):
  '''creates a [widget] from [op_obj] with [value] as parent, or gives [op_obj] back as-is'''
  return op_obj(value) if callable(op_obj) and not isNode(op_obj) else op_obj

def place(e_ctor, slot=None):
  '''builds [e_ctor] into the element currently being configured'''
  receiver = current()
  if receiver is None: raise InvalidAttachment("place() called outside of a configure block")
  return give(receiver, e_ctor, slot)

def by(sink, attr_or_ctor, e_ctor=None):
  '''
  by(holder, e_ctor): also writes the built element into a write-once [holder] (any callable sink).
  by(owner, "attr", e_ctor): also sets owner.attr to the built element.
  '''
  if e_ctor is None: (write, ctor) = (sink, attr_or_ctor)
  else: (write, ctor) = (lambda e: setattr(sink, attr_or_ctor, e), e_ctor)
  def createAssign(p, slot=None):
    e = give(p, ctor, slot)
    write(e); return e
  createAssign.isCurried = True
  return createAssign
