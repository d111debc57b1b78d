'''
Marshaling calls onto the thread that owns a node tree.

Trees are not thread safe: building or mutating one from another thread is unsupported,
so results of background work are passed back with [EventPoller.callThreadSafe],
and the owning thread runs them from its event loop by calling [EventPoller.poll]
(the tkinter adapter does it on a Tk `after` timer).
'''
import logging
import queue
import threading
import time
from functools import wraps
from typing import Callable, Optional

logger = logging.getLogger(__name__)

MSG_CALL_FROM_THR_MAIN = "call from the owning thread."

class FutureResult:
  '''pending operation result, use [getValue] / [getValueOr] to wait'''
  def __init__(self):
    self._cond = threading.Event()
    self._value = None
    self._error:Optional[BaseException] = None

  def setValue(self, value):
    self._value = value
    self._cond.set()
  def setError(self, exc):
    self._error = exc
    self._cond.set()
  @property
  def isDone(self) -> bool: return self._cond.is_set()

  def _wait(self, timeout):
    if not self._cond.wait(timeout): raise TimeoutError("result not ready after %ss" %timeout)
  def getValueOr(self, on_error, timeout=None):
    self._wait(timeout)
    if self._error is not None: return on_error(self._error)
    return self._value
  def getValue(self, timeout=None): return self.getValueOr(FutureResult.rethrow, timeout)
  def fold(self, done, fail, timeout=None):
    self._wait(timeout)
    return done(self._value) if self._error is None else fail(self._error)
  @staticmethod
  def rethrow(ex): raise ex

  @staticmethod
  def of(value) -> "FutureResult":
    res = FutureResult(); res.setValue(value)
    return res

class EventPoller:
  '''after-event loop operation dispatcher, [poll] must be driven by the owning thread'''
  def __init__(self, owner_ident:Optional[int]=None, poll_interval_ms=(1_000//20) ):
    self._owner_ident = owner_ident if owner_ident is not None else threading.get_ident()
    self.poll_interval_ms = poll_interval_ms
    self._call_queue = queue.Queue() # (func, args, kwargs, future)
  def isThreadMain(self): return threading.get_ident() == self._owner_ident

  def callThreadSafe(self, op, args=(), kwargs={}) -> FutureResult:
    '''runs [op] now if called from the owning thread, otherwise queues it for [poll]'''
    future = FutureResult()
    if self.isThreadMain():
      try: future.setValue(op(*args, **kwargs))
      except Exception as ex: future.setError(ex)
      return future
    self._call_queue.put((op, args, kwargs, future))
    return future

  def poll(self) -> int:
    '''runs every queued call, errors go to their futures. returns the count run'''
    if not self.isThreadMain(): raise RuntimeError(MSG_CALL_FROM_THR_MAIN)
    n = 0
    while True:
      try: item = self._call_queue.get(block=False)
      except queue.Empty: break
      (func, args, kwargs, future) = item
      try: value = func(*args, **kwargs)
      except Exception as ex:
        logger.debug("queued call %r failed: %r", func, ex)
        future.setError(ex)
      else: future.setValue(value)
      n += 1
    return n
  @property
  def pending(self) -> int: return self._call_queue.qsize()

def makeThreadSafe(poller:EventPoller):
  '''
  A decorator that makes a function safe to be called from any thread, (and it runs in the owning thread).
  [op] should not block the owning event loop, the calling thread waits for its result.
  '''
  def decorator(op:Callable):
    @wraps(op)
    def safe(*args, **kwargs): return poller.callThreadSafe(op, args, kwargs).getValue()
    return safe
  return decorator

def runAsync(poller:EventPoller, thunk, op, **kwargs):
  '''launch the [thunk], then call [op] safely with its result, return thunk() result'''
  future = lambda res: poller.callThreadSafe(op, (res,), kwargs)
  return thunk(future)

def thunkifySync(op, *args, **kwargs):
  '''runs blocking [op] on a new thread when given a callback'''
  def callAsync(cb):
    thr = threading.Thread(target=lambda: cb(op(*args, **kwargs)), daemon=True)
    thr.start(); return thr
  return callAsync

def delay(msec):
  return thunkifySync(time.sleep, msec/1000)
