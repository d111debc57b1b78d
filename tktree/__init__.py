'''
This is a declarative node-tree builder, with tkinter as the toolkit that shows the tree.
use `import tktree.widgets as _` for text(str)/button()/vbox(...)/... ; TkGUI / TkWin from tktree.ui

One builder call = construct, configure, attach, return:
- `_.button("Ok", configure=lambda it: it.on("click", ok))` is *curried*, give it a parent to build:
  calling it with a container constructs the Button, runs configure on it, then attaches it
- configure runs to completion before attaching, so children built inside it are attached
  to their parent before that parent is attached to its own (post-order), and siblings attach
  in the order they were declared
- containers decide placement: boxes append, scrollPane/labeledBox/tab hold one slot,
  borderPane has top/left/center/right/bottom regions, tabPane takes tabs, menus take menu items.
  a second write to a slot replaces the first occupant (only detaches it) unless slot_policy="strict"
- a node has one owner: attaching it elsewhere detaches it first

Notice:
- use .childs for children list of a container
- `_.by(holder, widget)` captures the built element in a write-once [SingleAssign] (or `_.by(self, "attr", widget)`)
- inside configure, [place] builds into the element being configured, same as the explicit param
- spinBox&slider: range(start, stop) is end-exclusive, so 1..100 represented as range(1,100+1)
- trees are single-threaded: marshal background results with [EventPoller.callThreadSafe]
- errors: InvalidArgument (bad constructor input), InvalidAttachment (container refuses),
  AlreadyAssigned / NotYetAssigned (write-once misuse), all raised to the immediate caller
'''

__all__ = ["builder", "nodes", "widgets", "holder", "registry", "looper", "codegen", "utils", "ui"]
from .utils import TreeError, InvalidArgument, InvalidAttachment, AlreadyAssigned, NotYetAssigned
from .builder import build, widget, give, place, current, by
from .holder import SingleAssign, singleAssign
from .registry import Registry, Component, Controller, View
