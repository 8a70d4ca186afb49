import io

import pytest

from xsmc.spl.exprgen import ExpressionGenerator
from xsmc.spl.node import NodeType, make_nonterm, make_term


def num(value):
    return make_term(NodeType.NUM, None, value)


def reg(number):
    return make_term(NodeType.REG, None, number)


def run(node):
    out = io.StringIO()
    gen = ExpressionGenerator(out)
    gen.generate(node)
    return gen, out.getvalue().splitlines()


def mnemonics(lines):
    return [line.split()[0] for line in lines]


def test_number_leaf():
    gen, lines = run(num(7))
    assert lines == ["MOV R16, 7"]
    assert gen.temps == 1
    assert gen.line_count == 1


def test_register_plus_register():
    gen, lines = run(make_nonterm(NodeType.ADD, reg(1), reg(2)))
    assert lines == ["MOV R16, R1", "ADD R16, R2"]
    assert gen.temps == 1


def test_nested_expression_order():
    left = make_nonterm(NodeType.ADD, reg(1), num(3))
    right = make_nonterm(NodeType.SUB, reg(2), reg(3))
    gen, lines = run(make_nonterm(NodeType.MUL, left, right))
    assert mnemonics(lines) == ["MOV", "ADD", "MOV", "SUB", "MUL"]
    assert gen.temps == 1
    assert gen.line_count == len(lines)


def test_less_than_with_register_left_is_swapped():
    expr = make_nonterm(NodeType.ADD, reg(2), num(1))
    gen, lines = run(make_nonterm(NodeType.LT, reg(1), expr))
    assert mnemonics(lines)[-1] == "GT"
    assert lines[-1].endswith("R1")
    assert gen.temps == 1


def test_less_equal_with_register_left_becomes_greater_equal():
    gen, lines = run(make_nonterm(NodeType.LE, reg(4), num(9)))
    assert mnemonics(lines) == ["MOV", "GE"]
    assert lines[-1].endswith("R4")


def test_subtract_expression_from_register_keeps_order():
    expr = make_nonterm(NodeType.MUL, reg(2), reg(3))
    gen, lines = run(make_nonterm(NodeType.SUB, reg(1), expr))
    assert lines[0] == "MOV R16, R1"
    assert lines[-1] == "SUB R16, R17"
    assert gen.temps == 1


def test_not_of_register():
    gen, lines = run(make_nonterm(NodeType.NOT, reg(5), None))
    assert lines == ["MOV R16, 1", "SUB R16, R5"]
    assert gen.temps == 1


def test_address_expression_dereferences_top():
    gen, lines = run(make_nonterm(NodeType.ADDR_EXPR, num(100), None))
    assert lines[-1] == "MOV R16, [R16]"
    assert gen.temps == 1


def test_port_and_special_registers_by_name():
    gen, lines = run(make_nonterm(NodeType.ADD, reg(20), reg(26)))
    assert lines == ["MOV R16, P0", "ADD R16, SP"]


@pytest.mark.parametrize(
    "kind",
    [
        NodeType.LT, NodeType.GT, NodeType.EQ, NodeType.LE, NodeType.GE,
        NodeType.NE, NodeType.AND, NodeType.OR, NodeType.ADD, NodeType.SUB,
        NodeType.MUL, NodeType.DIV, NodeType.MOD,
    ],
)
def test_binary_operators_leave_one_value(kind):
    left = make_nonterm(NodeType.ADD, reg(1), num(2))
    right = make_nonterm(NodeType.MUL, reg(3), num(4))
    gen, lines = run(make_nonterm(kind, left, right))
    assert gen.temps == 1
    assert gen.line_count == len(lines)


def test_none_writes_nothing():
    gen, lines = run(None)
    assert lines == []
    assert gen.temps == 0


def test_statement_node_is_rejected():
    with pytest.raises(ValueError):
        run(make_term(NodeType.HALT, None, 0))


def test_compiler_reserved_register_has_no_name():
    with pytest.raises(ValueError):
        run(make_nonterm(NodeType.ADD, reg(17), reg(1)))