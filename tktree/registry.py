'''
Type-keyed component registry. Views and controllers are found by their class,
constructed lazily on first [Registry.find] with the registry itself as the only argument,
and owned by the registry (one instance per type and registry) until [Registry.close].
'''
import logging
from inspect import isfunction, ismethod
from typing import Callable, Dict, List, Optional, Type, TypeVar, Union

from .builder import mayGive1
from .nodes import Node
from .utils import AlreadyAssigned, InvalidArgument, NotYetAssigned

logger = logging.getLogger(__name__)

C = TypeVar("C")

def isFactory(x) -> bool: return isinstance(x, type) or isfunction(x) or ismethod(x)

class Registry:
  def __init__(self):
    self._instances:Dict[type, object] = {}
    self._factories:Dict[type, Callable[["Registry"], object]] = {}
    self._building:List[type] = []

  def __contains__(self, type_key): return type_key in self._instances or type_key in self._factories
  def register(self, type_key:type, instance_or_factory:Union[object, Callable[["Registry"], object]]):
    '''
    pre-seeds [type_key] with an instance, or a factory taking the registry.
    only classes, functions and bound methods are factories, a callable instance is kept as-is
    '''
    if type_key in self: raise AlreadyAssigned("%s is already registered" %type_key.__qualname__)
    if isFactory(instance_or_factory): self._factories[type_key] = instance_or_factory
    else: self._instances[type_key] = instance_or_factory

  def find(self, type_key:Type[C]) -> C:
    inst = self._instances.get(type_key)
    if inst is not None: return inst
    if type_key in self._building:
      cycle = self._building[self._building.index(type_key):] + [type_key]
      raise InvalidArgument("construction cycle: %s" %" -> ".join(t.__qualname__ for t in cycle))
    factory = self._factories.get(type_key, type_key)
    self._building.append(type_key)
    try: inst = factory(self)
    finally: self._building.pop()
    self._instances[type_key] = inst
    logger.debug("registry created %s", type_key.__qualname__)
    return inst
  def get(self, type_key:Type[C]) -> C:
    '''like [find] but never constructs'''
    inst = self._instances.get(type_key)
    if inst is None: raise NotYetAssigned("%s is not created yet" %type_key.__qualname__)
    return inst
  @property
  def instances(self) -> list: return list(self._instances.values())

  def close(self):
    '''destroys every created view's tree and closes components, newest first'''
    for inst in reversed(list(self._instances.values())):
      if isinstance(inst, View): inst.dispose()
      elif hasattr(inst, "close"): inst.close()
    self._instances.clear()

class Component:
  def __init__(self, registry:Registry):
    self.registry = registry
  def find(self, type_key:Type[C]) -> C: return self.registry.find(type_key)

class Controller(Component):
  '''non-visual logic shared by views'''

class View(Component):
  '''a component owning one node tree, built lazily from [layout]'''
  title:Optional[str] = None
  def __init__(self, registry:Registry):
    super().__init__(registry)
    self._root:Optional[Node] = None
  def layout(self):
    '''returns the curried widget (or element) of the root'''
    raise NotImplementedError("view layout")
  @property
  def root(self) -> Node:
    if self._root is None:
      e = mayGive1(None, self.layout())
      if not isinstance(e, Node): raise InvalidArgument("%s.layout() should give a Node, got %r" %(type(self).__qualname__, e))
      self._root = e
    return self._root
  @property
  def isBuilt(self) -> bool: return self._root is not None
  def dispose(self):
    if self._root is not None: self._root.destroy()
    self._root = None
