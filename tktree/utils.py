import logging
import os
import traceback

logger = logging.getLogger(__name__)
_packageDir = os.path.dirname(os.path.abspath(__file__))

class TreeError(Exception):
  '''base of every error raised while building or wiring a node tree'''
class InvalidArgument(TreeError, ValueError):
  '''bad constructor input (or a registry construction cycle)'''
class InvalidAttachment(TreeError):
  '''element not accepted by the target container, or slot/region misuse'''
class AlreadyAssigned(TreeError):
  '''second write to a write-once cell'''
class NotYetAssigned(TreeError):
  '''read of a write-once cell before its first write'''

MSG_NOT_ACCEPTED = "%r does not accept %r (category %s)"
MSG_UNKNOWN_SLOT = "%r has no slot %r, expecting one of %s"
MSG_SLOT_TAKEN = "slot %r of %r is already held by %r"
MSG_DESTROYED = "%r is destroyed"
MSG_NOT_CHILD = "%r is not a child of %r"

def nop(*arg, **kwargs): pass

def kwargsNotNull(**kwargs):
  return {key: v for (key, v) in kwargs.items() if v is not None}

class EventName:
  def __init__(self, name:str):
    self.name = "on%s" %name.capitalize() if name.isalnum() else name
  def __str__(self):
    return self.name
  __repr__ = __str__
  def __eq__(self, other): return str(self) == str(other)
  def __hash__(self): return self.name.__hash__()

class EventCallback:
  """An object that calls functions. Use [bind] / [__add__] or [run]"""
  def __init__(self):
    self._callbacks = []

  class CallbackBreak(Exception): pass
  @staticmethod
  def stopChain(): raise EventCallback.CallbackBreak()

  def isIgnoredFrame(self, frame):
    '''Is a stack trace frame ignored by [bind], frames inside this package are'''
    return os.path.dirname(os.path.abspath(frame.filename)) == _packageDir
  def bind(self, op, args=(), kwargs={}):
    """Schedule `op(*args, *run_args, **kwargs)` to [run]."""
    stack = traceback.extract_stack()
    while stack and self.isIgnoredFrame(stack[-1]): del stack[-1]
    stack_info = "".join(traceback.format_list(stack))
    self._callbacks.append((op, args, kwargs, stack_info))
  def __add__(self, op):
    self.bind(op); return self
  def __len__(self): return len(self._callbacks)
  def __iter__(self): return (cb[0] for cb in self._callbacks)

  def remove(self, op):
    """Undo a [bind] call. only [op] is used as its identity, args are ignored"""
    for i in reversed(range(len(self._callbacks))):
      if self._callbacks[i][0] == op:
        del self._callbacks[i]
        return
    raise ValueError("not bound: %r" %op)
  def clear(self): self._callbacks.clear()

  def run(self, *run_args) -> bool:
    """Run the connected callbacks(ignore result) and log errors. If one callback requested [stopChain], return False"""
    for (op, args, kwargs, stack_info) in list(self._callbacks):
      try: op(*args, *run_args, **kwargs)
      except EventCallback.CallbackBreak: return False
      except Exception:
        logger.error("callback %r failed, bound at:\n%s%s", op, stack_info, traceback.format_exc())
        break
    return True

# boilerplates
class id_dict(dict):
  '''try to store objects, use its identity to force store unhashable types'''
  def get(self, key, default=None): return super().get(id(key), default)
  def getOrPut(self, key, get_value): return super().setdefault(id(key), get_value())
  def __getitem__(self, key): return super().__getitem__(id(key))
  def __setitem__(self, key, value): return super().__setitem__(id(key), value)
  def __delitem__(self, key): return super().__delitem__(id(key))
  def __contains__(self, key): return super().__contains__(id(key))
