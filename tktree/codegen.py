import logging
from keyword import iskeyword

from .nodes import Node
from .utils import id_dict, nop

logger = logging.getLogger(__name__)

class SyntaxFmt: #singleton
  '''some language-sepcific syntax formatters'''
  @staticmethod
  def pyArg(params):
    '''arg1, arg2, kw1=kw1v, kw2=kw2v'''
    (args, kwargs) = params
    sb = []
    sb.extend(args)
    for (name, v) in kwargs.items(): sb.append("%s=%s" %(name, v) )
    return ", ".join(sb)
  @staticmethod
  def pyOpRef(op):
    '''dotted path of a named function, None for lambdas and locals'''
    qname = getattr(op, "__qualname__", None)
    if qname is None or "<" in qname: return None
    valid = qname.replace(".", "").isidentifier()
    if not valid: return None
    owner = getattr(op, "__self__", None)
    if owner is not None and not isinstance(owner, type): return None # bound to an instance
    return qname
  argList = pyArg
  value = repr
  list = lambda xs: "[%s]" %", ".join(xs)
  tuple = lambda xs: "(%s,)" %xs[0] if len(xs) == 1 else "(%s)" %", ".join(xs)
  assign = lambda name, x: "%s = %s" %(name, x)
  opRef = lambda op: SyntaxFmt.pyOpRef(op)
  call = lambda op_name, params: "%s(%s)" %(op_name, SyntaxFmt.argList(params))
  builderRef = lambda name: "_.%s" %name
  tfNil = ("True", "False", "None")
  lineSep = "\n"
fmt = SyntaxFmt

# node kind -> builder in tktree.widgets, when they differ
builderNames = {
  "checkbox": "checkBox", "radiobutton": "radioButton", "listbox": "listBox", "combobox": "comboBox",
  "spinbox": "spinBox", "progressbar": "progressBar", "scrollpane": "scrollPane", "labeledbox": "labeledBox",
  "borderpane": "borderPane", "tabpane": "tabPane", "menubar": "menuBar", "menuitem": "menuItem",
  "menusep": "menuSep", "menucheck": "menuCheck", "menuradio": "menuRadio"
}

def indexOfLast(p, xs):
  idxPart = 0; idxXs = len(xs) -1
  for (i, x) in enumerate(reversed(xs)):
    if not p(x): idxPart = idxXs-i +1; break
  return idxPart

class Codegen:
  '''
  Dumps a node tree as flat Python statements, one curried widget per node in post-order,
  so running the code with `import tktree.widgets as _` rebuilds an equivalent tree.
  Values with no source form (e.g. Tk variables) become extern names, see [externs].
  NOTE: only on_click handlers survive, other [Node.on] registrations are not dumped.
  '''
  useDebug = False
  def __init__(self):
    self._sb = []
    self._names = id_dict()
    self._externs = {}
  def clear(self):
    self._sb.clear()
    self._names.clear(); self._externs.clear()
  def _write(self, text): self._sb.append(text)
  def getCode(self):
    code = fmt.lineSep.join(self._sb)
    if Codegen.useDebug: logger.debug("CodeDump:\n%s", code)
    return code
  @property
  def externs(self) -> dict:
    '''name -> value that the dumped code expects to be given'''
    return dict(self._externs)

  @staticmethod
  def nextName(name:str):
    '''a, a1, a2, ...'''
    if name == "": return "_"
    if not name[-1].isnumeric(): return "%s1" %name
    else:
      idxNPart = indexOfLast(str.isnumeric, name)
      return "%s%d" %(name[:idxNPart], 1+int(name[idxNPart:]))
  def _allocName(self, name):
    qname = name
    taken = set(self._names.values()) | set(self._externs)
    while qname in taken or qname in ("_", "nop"): qname = Codegen.nextName(qname)
    return qname
  def named(self, name, x, is_extern=False):
    '''gives [x] a name, [nextName] is used if it's taken'''
    qname = self._allocName(name)
    self._names[x] = qname
    if is_extern: self._externs[qname] = x
    return qname

  def nv(self, x) -> str:
    '''source expression for value [x], dumping nodes on first sight'''
    name = self._names.get(x)
    if name is not None: return name
    if isinstance(x, Node): return self._dump(x)
    if x is True or x is False or x is None: return fmt.tfNil[(True, False, None).index(x)]
    if x is nop: return "nop"
    if isinstance(x, (str, int, float, range)): return fmt.value(x)
    if isinstance(x, list): return fmt.list([self.nv(it) for it in x])
    if isinstance(x, tuple): return fmt.tuple([self.nv(it) for it in x])
    if callable(x):
      ref = fmt.opRef(x)
      if ref is not None and "." not in ref: return self.named(ref, x, is_extern=True)
      opName = getattr(x, "__name__", "")
      return self.named(opName if opName.isidentifier() and not iskeyword(opName) else "op", x, is_extern=True)
    return self.named(type(x).__name__.lower(), x, is_extern=True)

  def _dump(self, e:Node) -> str:
    (args, kwargs) = e.ctorArgs()
    params = ([self.nv(it) for it in args], {k: self.nv(v) for (k, v) in kwargs.items()})
    name = self.named(e.codeName, e)
    self._write(fmt.assign(name, fmt.call(fmt.builderRef(builderNames.get(e.kind, e.kind)), params)))
    return name

  def dumpTree(self, e:Node, result="tree") -> str:
    '''code that assigns the rebuilt [e] to [result]'''
    self.clear()
    ctor = self.nv(e)
    self._write(fmt.assign(result, "%s(None)" %ctor))
    return self.getCode()

  def runCode(self, code, result="tree", **extra_names):
    '''run dumped code, with [externs] and [extra_names] bound, return the rebuilt tree'''
    from . import widgets
    scope = {"_": widgets, "nop": nop, **self._externs, **extra_names}
    exec(compile(code, "<tktree-codegen>", "exec"), scope)
    return scope[result]

def dumpTree(e:Node) -> str: return Codegen().dumpTree(e)
