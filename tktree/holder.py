'''
Write-once references, for capturing builder results without declaring them first:

  class Form(View):
    ok = singleAssign()
    def layout(self): return _.hbox(_.by(self, "ok", _.button("Ok")))

or with a standalone cell: `ok = SingleAssign(); _.by(ok, _.button("Ok"))`.
'''
from typing import Generic, TypeVar

from .utils import AlreadyAssigned, NotYetAssigned

T = TypeVar("T")
_UNSET = object()

class SingleAssign(Generic[T]):
  '''write-once cell: set once, then get forever. Calling it is [set], so it fits [by] as a sink'''
  def __init__(self, name="value"):
    self.name = name
    self._value = _UNSET
  @property
  def isAssigned(self) -> bool: return self._value is not _UNSET
  def get(self) -> T:
    if self._value is _UNSET: raise NotYetAssigned("%s is not assigned yet" %self.name)
    return self._value
  def set(self, value:T) -> T:
    if self._value is not _UNSET: raise AlreadyAssigned("%s is already assigned to %r" %(self.name, self._value))
    self._value = value
    return value
  __call__ = set
  value = property(get, set)
  def __repr__(self):
    return "SingleAssign(%s=%r)" %(self.name, self._value) if self.isAssigned else "SingleAssign(%s, unset)" %self.name

class singleAssign:
  '''descriptor form of [SingleAssign], each instance gets its own cell'''
  def __init__(self):
    self.name = "?"
  def __set_name__(self, owner, name):
    self.name = name
  def _cell(self, obj) -> SingleAssign:
    cells = obj.__dict__.setdefault("_singleAssigns", {})
    cell = cells.get(self.name)
    if cell is None:
      cell = cells[self.name] = SingleAssign("%s.%s" %(type(obj).__name__, self.name))
    return cell
  def __get__(self, obj, owner=None):
    if obj is None: return self
    return self._cell(obj).get()
  def __set__(self, obj, value):
    self._cell(obj).set(value)
  def isAssigned(self, obj) -> bool: return self._cell(obj).isAssigned
