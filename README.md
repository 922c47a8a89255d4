# tnac

Building blocks for a small calculator language: a runtime value model,
diagnostic messages, an intermediate representation organised as a control
flow graph, and the bookkeeping structures used while lowering expressions to
that representation. Pure Python, no third-party dependencies.

## Modules

- `tnac.values` – `Value`, a value tagged with a `TypeId` (`INVALID`, `BOOL`,
  `INT`, `FLOAT`, `COMPLEX`, `FRACTION`, `FUNCTION`, `ARRAY`). Payloads are
  `bool`, `int`, `float`, `complex`, `Ratio`, `FunctionType`, `ArrayType` or
  `InvalidValue`; any other payload raises `TypeError`. A `Value()` with no
  payload is invalid and is falsy. `Ratio` is a signed fraction kept in lowest
  terms, where a zero denominator stands for infinity. Constants come from
  `Value.pi()`, `Value.e()`, `Value.i()`, `Value.true_val()` and
  `Value.false_val()`; `get`, `try_get`, `get_id` and `on_value` read payloads.
- `tnac.traits` – `ValOps` (the operation set), `TypeInfo` and `type_info`
  (constructor signatures), `cast_value` (returns `None` when a payload cannot
  be converted), `to_bool`, `common_type_id`, `complex_mod`, `fraction_mod`,
  `abs_of`, `head`, `tail`, `inv`, `eq`, `less` and `size_of`.
- `tnac.arrays` – `Store` owns `ArrayData` (growable value lists) and
  `ArrayWrapper` views over them (`allocate_array`, `wrap`, `rewrap`).
- `tnac.frames` – `StackFrame`, `CallStack` and `Env` for evaluation state.
- `tnac.instructions` – `OpCode`, `opcode_str`, `VReg` (named or indexed
  registers), `FuncParam`, `Operand`, `Instruction` and the linked
  `InstructionList`.
- `tnac.blocks` – `BasicBlock` and `Edge`.
- `tnac.function` – `Function`, owning blocks and nested functions.
- `tnac.builder` – `Builder`, which creates and keeps functions,
  instructions, registers, edges and interned array `Constant`s.
- `tnac.cfg` – `Cfg`, the graph of modules and functions built through a
  `Builder`.
- `tnac.compiler_stack` – `CompilerStack`, the operand stack used while
  compiling, including folding of typed constructors via `instantiate`.
- `tnac.context` – `Context`, per-function compilation state: current and
  terminal blocks, variables, insertion points and scopes.
- `tnac.names` – `NameRepo`, which hands out numbered block, register and
  variable names and mangles function names.
- `tnac.diag` – functions returning diagnostic message strings.
- `tnac.feedback` – `Feedback`, which routes errors, parse errors, compile
  errors, warnings, notes, commands and file-load requests to registered
  handlers; an event with no handler does nothing.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Examples

Diagnostics and feedback:

```python
from tnac import diag
from tnac.feedback import Feedback

fb = Feedback()
messages = []
fb.on_error(messages.append)
fb.error(diag.wrong_arg_num(2, 3))
print(messages)  # ['Too many arguments. Expected 2, got 3']
```

Building a piece of IR:

```python
from tnac.cfg import Cfg
from tnac.instructions import OpCode
from tnac.values import Value

cfg = Cfg()
mod = cfg.declare_module("main", "main:0", 0)
entry = mod.create_block("entry")
result = cfg.builder.make_register(0)
cfg.builder.add_instruction(entry, OpCode.ADD).add(result).add(Value(1)).add(Value(2))
print([instr.opcode_str() for instr in entry])  # ['add']
```

Folding a constructor on the compiler stack:

```python
from tnac.compiler_stack import CompilerStack
from tnac.values import TypeId, Value

stack = CompilerStack()
stack.push(Value(3))
stack.push(Value(4))
stack.instantiate(TypeId.FRACTION, 2)
print(stack.extract().value)  # Value(Ratio(3, 4))
```

Naming:

```python
from tnac.names import NameRepo

names = NameRepo()
print(names.make_block_name("cond", "then"))  # cond.then.0
print(names.make_block_name("cond", "then"))  # cond.then.1
```

## What this package does not do

This package has no lexer, parser or syntax tree, no compiler that walks a
syntax tree to produce IR, no IR evaluator and no command-line program or
interactive prompt. It provides the data structures those parts work with;
`Value` carries no arithmetic operators of its own beyond the helpers in
`tnac.traits`.