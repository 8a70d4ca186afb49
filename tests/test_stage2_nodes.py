from xsmc.stage2.nodes import (
    NodeType,
    VarType,
    make_arith,
    make_assign,
    make_connector,
    make_num,
    make_read,
    make_var,
    make_write,
)


def test_enum_values_follow_source():
    assert make_num(0).nodetype == 1
    assert make_connector(None, None).nodetype == len(NodeType)
    assert make_num(0).type == 101


def test_make_num():
    node = make_num(9)
    assert node.nodetype is NodeType.NUM
    assert node.val == 9
    assert node.type is VarType.INT
    assert node.varname is None


def test_make_var():
    node = make_var("x")
    assert node.nodetype is NodeType.ID
    assert node.varname == "x"
    assert node.type is VarType.NONE


def test_make_arith():
    a, b = make_num(1), make_num(2)
    node = make_arith(NodeType.MINUS, a, b)
    assert node.nodetype is NodeType.MINUS
    assert node.left is a and node.right is b


def test_make_assign_builds_target():
    expr = make_num(5)
    node = make_assign(make_var("b"), expr)
    assert node.nodetype is NodeType.ASSIGN
    assert node.varname == "b"
    assert node.right is expr
    assert node.left.nodetype is NodeType.ID
    assert node.left.varname == "b"
    assert node.left.val == 5
    assert node.left.type is VarType.INT


def test_make_read():
    ident = make_var("c")
    node = make_read(ident)
    assert node.nodetype is NodeType.READ
    assert node.left is ident
    assert node.varname == "c"
    assert node.right is None


def test_make_write():
    expr = make_num(3)
    node = make_write(expr)
    assert node.nodetype is NodeType.WRITE
    assert node.left is expr
    assert node.right is None


def test_make_connector():
    a, b = make_write(make_num(1)), make_write(make_num(2))
    node = make_connector(a, b)
    assert node.nodetype is NodeType.CONNECTOR
    assert (node.left, node.right) == (a, b)