import pytest

import tktree.widgets as _
from tktree import Registry, Component, Controller, View
from tktree import AlreadyAssigned, InvalidArgument, NotYetAssigned


class Store(Controller):
  def __init__(self, registry):
    super().__init__(registry)
    self.items = ["apple", "lamb"]
    self.closed = False
  def close(self): self.closed = True

class ListView(View):
  def __init__(self, registry):
    super().__init__(registry)
    self.store = self.find(Store)
  def layout(self):
    return _.vbox(*[_.text(it) for it in self.store.items])


def test_find_is_lazy_and_cached():
  reg = Registry()
  assert Store not in reg.instances
  view = reg.find(ListView)
  assert reg.find(ListView) is view
  assert view.store is reg.find(Store)
  assert not view.isBuilt


def test_view_root_built_once():
  view = Registry().find(ListView)
  root = view.root
  assert root is view.root
  assert [it["text"] for it in root] == ["apple", "lamb"]
  assert root.parent is None


def test_registries_do_not_share_instances():
  assert Registry().find(Store) is not Registry().find(Store)


def test_register_instance_and_factory():
  reg = Registry()
  store = Store(reg)
  reg.register(Store, store)
  assert reg.find(Store) is store
  with pytest.raises(AlreadyAssigned):
    reg.register(Store, Store)
  made = []
  def makeView(r):
    made.append(r)
    return ListView(r)
  reg.register(ListView, makeView)
  assert reg.find(ListView).store is store
  assert made == [reg]


class Counter(Controller):
  def __init__(self, registry):
    super().__init__(registry)
    self.n = 0
  def __call__(self):
    self.n += 1
    return self.n


def test_callable_instance_is_registered_as_instance():
  reg = Registry()
  counter = Counter(reg)
  reg.register(Counter, counter)
  assert reg.find(Counter) is counter
  assert reg.get(Counter) is counter
  assert counter() == 1


def test_get_never_constructs():
  reg = Registry()
  with pytest.raises(NotYetAssigned):
    reg.get(Store)
  reg.find(Store)
  assert reg.get(Store) is reg.find(Store)


class Ping(Component):
  def __init__(self, registry):
    super().__init__(registry)
    self.pong = self.find(Pong)

class Pong(Component):
  def __init__(self, registry):
    super().__init__(registry)
    self.ping = self.find(Ping)


def test_construction_cycle():
  reg = Registry()
  with pytest.raises(InvalidArgument, match="Ping -> Pong -> Ping"):
    reg.find(Ping)
  assert reg.instances == []


def test_close_disposes_views_and_components():
  reg = Registry()
  view = reg.find(ListView)
  root = view.root
  store = reg.find(Store)
  reg.close()
  assert root.isDestroyed
  assert store.closed
  assert reg.instances == []


class Broken(View):
  def layout(self): return "not a node"


def test_layout_must_give_a_node():
  with pytest.raises(InvalidArgument):
    Registry().find(Broken).root


def test_view_without_layout():
  with pytest.raises(NotImplementedError):
    Registry().find(View).root
