# xsmc

`xsmc` is a library of small code generators that turn syntax trees into
assembly for the XSM machine. It uses only the Python standard library.

The package is organised in stages. Each stage adds language features on
top of the one before it. Every code generator writes to any text stream
(a file opened for writing, or `io.StringIO`).

## Registers

`xsmc.registers.RegisterAllocator` hands out registers `R0` to `R19`
lowest first (`allocate`) and frees them in reverse order (`release`);
`reset` frees them all and `in_use` counts those allocated. Allocating a
twenty-first register raises `OutOfRegistersError`.

## Stage 1: arithmetic expressions

`xsmc.stage1.tree` builds expression trees with `make_leaf` and
`make_operator` and walks them with the generators `inorder`, `preorder`
and `postorder`, which yield each node's label (its number or operator).

`xsmc.stage1.codegen.write_header` writes the eight-word executable
header. `CodeGenerator.generate` emits `MOV`, `ADD`, `SUB`, `MUL` and `DIV`
instructions and returns the register holding the result, which is always
the lower-numbered of the two operand registers. An operator other than
`+`, `-`, `*` or `/` raises `UnknownOperatorError`.

```python
import io

from xsmc.stage1.codegen import CodeGenerator
from xsmc.stage1.tree import make_leaf, make_operator

expr = make_operator("+", make_leaf(3), make_operator("*", make_leaf(4), make_leaf(5)))
out = io.StringIO()
CodeGenerator(out).generate(expr)   # returns 0
print(out.getvalue())
# MOV R0, 3
# MOV R1, 4
# MOV R2, 5
# MUL R1, R2
# ADD R0, R1
```

## Stage 2: variables, read and write

`xsmc.stage2.nodes` defines `NodeType`, `VarType` and `Node`, with the
constructors `make_num`, `make_var`, `make_arith`, `make_assign`,
`make_read`, `make_write` and `make_connector`. Variables are named by
their first letter and live at fixed addresses from 4096 upwards:

```python
from xsmc.stage2.memory import address_of

address_of("a")  # 4096
address_of("c")  # 4098
```

`xsmc.stage2.codegen` writes the header and stack pointer set-up with
`write_header` and the program exit sequence with `write_exit`; its
`CodeGenerator` emits code for statements. Read and write become library
calls through `CALL 0`. A node it cannot translate raises
`UnknownNodeError`.

## Stage 3: control flow

`xsmc.stage3.nodes` adds comparisons (`make_bool`), `make_if`,
`make_if_else`, `make_while`, `make_do_while`, `make_repeat_until`,
`make_break` and `make_continue`, along with the layout constants of the
code area. `xsmc.stage3.memory.address_of` works as in stage 2.

The stage 3 `CodeGenerator` emits symbolic labels such as `L0:` and jumps
such as `JZ R0, L1`; its `LabelManager` numbers labels and tracks the
enclosing loops for `break` and `continue` (outside a loop these emit
nothing). `xsmc.stage3.labels` then resolves labels to addresses:

- `build_label_table(lines)` skips the eight header lines, counts two
  words per instruction from address 2056, and returns a dict from label
  number to address. A program reaching the end of the code area raises
  `CodeAreaExceededError`.
- `translate_labels(lines, table)` yields the lines without label
  definitions and with `JMP`, `JZ` and `JNZ` targets replaced by
  addresses. An unknown label raises `UndefinedLabelError`.

Nesting loops more than 100 deep raises `LoopNestingError`.

```python
import io

from xsmc.stage3.codegen import CodeGenerator, write_exit, write_header
from xsmc.stage3.labels import build_label_table, translate_labels

out = io.StringIO()
write_header(out)
CodeGenerator(out).generate(program)   # program: a tree built with xsmc.stage3.nodes
write_exit(out)

lines = out.getvalue().splitlines(keepends=True)
table = build_label_table(lines)
resolved = "".join(translate_labels(lines, table))
```

## SPL

`xsmc.spl` holds the code generator for SPL, the system programming
language for XSM:

- `xsmc.spl.registers`: the register file (`Register`), `register_name`
  for the assembly name of a register, and `is_allowed_register`, true for
  `R0` to `R15`. `R16` to `R19` are the compiler's scratch registers.
- `xsmc.spl.node`: `NodeType`, `Node` and the constructors `make_term`,
  `make_nonterm` and `make_tree`.
- `xsmc.spl.labels`: `LabelTable` for generated labels (`_L1`, `_L2`, …),
  declared labels (a second declaration raises `LabelRedeclaredError`)
  and the stack of enclosing `while` loops.
- `xsmc.spl.symbols`: `SymbolTable` for constants and block-scoped
  register aliases. `load_constants` reads `name value` pairs from a file
  (by default `splconstants.cfg`); `substitute` turns an identifier node
  into a number or register node. Clashing or unknown names raise
  `SymbolError`.
- `xsmc.spl.paths`: `expand_path` replaces a leading `$NAME` path
  component by that environment variable's value, and `output_filename`
  names the assembly file (`output_filename("os.spl")` gives `os.xsm`).
- `xsmc.spl.exprgen.ExpressionGenerator` and
  `xsmc.spl.codegen.CodeGenerator`: instruction selection for expressions
  and statements, counting emitted lines in `line_count`. A `call` or
  `goto` to an undeclared label raises `UndeclaredLabelError`.

## What the package does not do

There is no lexer or parser for any of the languages, and no command-line
compiler: syntax trees are built in Python with the constructor functions
above, and the generated assembly is written to a stream you supply.

## Running the tests

Install the `test` extra and run `pytest` from the project directory.