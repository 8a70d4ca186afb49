import io

import pytest

from xsmc.spl.codegen import CodeGenerator, UndeclaredLabelError
from xsmc.spl.labels import LabelTable
from xsmc.spl.node import NodeType, make_nonterm, make_term, make_tree


def reg(n):
    return make_term(NodeType.REG, None, n)


def num(n):
    return make_term(NodeType.NUM, None, n)


def run(node, labels=None):
    out = io.StringIO()
    gen = CodeGenerator(out, labels)
    gen.generate(node)
    return out.getvalue(), gen


@pytest.mark.parametrize(
    "kind, text",
    [
        (NodeType.HALT, "HALT\n"),
        (NodeType.BREAKPOINT, "BRKP\n"),
        (NodeType.RETURN, "RET\n"),
        (NodeType.IRETURN, "IRET\n"),
        (NodeType.BACKUP, "BACKUP\n"),
        (NodeType.RESTORE, "RESTORE\n"),
        (NodeType.READ, "IN\n"),
    ],
)
def test_simple_statements(kind, text):
    output, gen = run(make_term(kind, None, 0))
    assert output == text
    assert gen.line_count == 1


def test_assign_register_number():
    output, gen = run(make_nonterm(NodeType.ASSIGN, reg(1), num(5)))
    assert output == "MOV R1, 5\n"
    assert gen.temps == 0


def test_assign_register_expression_frees_scratch():
    expr = make_nonterm(NodeType.ADD, num(3), num(4))
    output, gen = run(make_nonterm(NodeType.ASSIGN, reg(2), expr))
    assert output.splitlines()[-1] == "MOV R2, R16"
    assert gen.temps == 0


def test_assign_address_from_port():
    target = make_nonterm(NodeType.ADDR_EXPR, num(10), None)
    port = make_term(NodeType.PORT, None, 20)
    output, gen = run(make_nonterm(NodeType.ASSIGN, target, port))
    assert output == "PORT R16, P0\nMOV [10], R16\n"
    assert gen.temps == 0


def test_assign_to_computed_address_releases_registers():
    address = make_nonterm(NodeType.ADD, num(1), num(2))
    target = make_nonterm(NodeType.ADDR_EXPR, address, None)
    output, gen = run(make_nonterm(NodeType.ASSIGN, target, reg(3)))
    assert output.splitlines()[-1] == "MOV [R16], R3"
    assert gen.temps == 0


def test_if_else_labels():
    node = make_tree(
        make_term(NodeType.IF, None, 0),
        reg(0),
        make_term(NodeType.HALT, None, 0),
        make_term(NodeType.RETURN, None, 0),
    )
    output, _ = run(node)
    assert output.splitlines() == ["JZ R0, _L1", "HALT", "JMP _L2", "_L1:", "RET", "_L2:"]


def test_while_with_break_and_continue():
    body = make_nonterm(
        NodeType.STMTLIST,
        make_term(NodeType.BREAK, None, 0),
        make_term(NodeType.CONTINUE, None, 0),
    )
    labels = LabelTable()
    output, gen = run(make_nonterm(NodeType.WHILE, reg(0), body), labels)
    lines = output.splitlines()
    assert lines[0] == "_L1:"
    assert lines[-1] == "_L2:"
    assert "JMP _L2" in lines and "JMP _L1" in lines
    with pytest.raises(IndexError):
        labels.while_end()
    assert gen.temps == 0


def test_break_outside_loop_fails():
    with pytest.raises(IndexError):
        run(make_term(NodeType.BREAK, None, 0))


def test_print_uses_port_one():
    output, gen = run(make_nonterm(NodeType.PRINT, num(7), None))
    assert output == "MOV R16, 7\nPORT P1, R16\nOUT\n"
    assert gen.temps == 0


def test_store_and_load_operand_order():
    store, _ = run(make_nonterm(NodeType.STORE, reg(1), num(5)))
    assert store == "STORE 5, R1\n"
    load, _ = run(make_nonterm(NodeType.LOAD, reg(1), reg(2)))
    assert load == "LOAD R1, R2\n"


def test_load_from_expressions_releases_registers():
    node = make_nonterm(NodeType.LOADI, num(1), num(2))
    output, gen = run(node)
    assert output.splitlines()[-1] == "LOADI R16, 2"
    assert gen.temps == 0


def test_call_undeclared_label_raises():
    node = make_nonterm(NodeType.CALL, make_term(NodeType.IDENT, "missing", 0), None)
    with pytest.raises(UndeclaredLabelError):
        run(node)


def test_goto_undeclared_label_raises():
    node = make_nonterm(NodeType.GOTO, make_term(NodeType.IDENT, "missing", 0), None)
    with pytest.raises(UndeclaredLabelError):
        run(node)


def test_call_declared_label_and_number():
    labels = LabelTable()
    labels.add("entry")
    named, _ = run(make_nonterm(NodeType.CALL, make_term(NodeType.IDENT, "entry", 0), None), labels)
    assert named == "CALL entry\n"
    numbered, _ = run(make_nonterm(NodeType.GOTO, num(3), None))
    assert numbered == "GOTO 3\n"


def test_label_definition_and_inline():
    stmts = make_nonterm(
        NodeType.STMTLIST,
        make_nonterm(NodeType.LABEL_DEF, make_term(NodeType.IDENT, "entry", 0), None),
        make_nonterm(NodeType.INLINE, make_term(NodeType.STRING, "NOP", 0), None),
    )
    output, _ = run(stmts)
    assert output == "entry:\nNOP\n"


def test_readi_and_encrypt():
    readi, _ = run(make_nonterm(NodeType.READI, reg(4), None))
    assert readi == "INI\nPORT R4, P0\n"
    enc, _ = run(make_nonterm(NodeType.ENCRYPT, reg(4), None))
    assert enc == "ENCRYPT R4\n"


def test_unknown_node_raises():
    with pytest.raises(ValueError):
        run(make_term(NodeType.STRCMP, None, 0))