import pytest

from brisk.ast import (
    Assign, Block, Call, Condition, ExpressionStatement, FunctionDeclaration,
    FunctionLiteral, Index, Infix, IntegerLiteral, Let, Prefix, Return,
)
from brisk.errors import (
    InvalidToken, ParseFailed, UnexpectedEndOfInput, UnexpectedToken,
)
from brisk.parser import Parser, parse_program
from brisk.lexer import Lexer
from brisk.tokens import TokenKind


def parse_errors(source):
    with pytest.raises(ParseFailed) as info:
        parse_program(source)
    return info.value.errors


@pytest.mark.parametrize('source, expected', [
    ("1 + 2 * 3", "(1+(2*3))"),
    ("(1 + 2) * 3", "((1+2)*3)"),
    ("a + b - c", "((a+b)-c)"),
    ("a * b / c", "((a*b)/c)"),
    ("-a * b", "((-a)*b)"),
    ("!-a", "(!(-a))"),
    ("a + b * c + d / e - f", "(((a+(b*c))+(d/e))-f)"),
    ("1 < 2 == true", "((1<2)==true)"),
    ("3 > 5 != 3 <= 5", "((3>5)!=(3<=5))"),
    ("a + add(b * c) + d", "((a+add((b*c)))+d)"),
    ("add(a, b, 1, 2 * 3, 4 + 5, add(6, 7 * 8))", "add(a, b, 1, (2*3), (4+5), add(6, (7*8)))"),
    ("a * [1, 2, 3, 4][b * c] * d", "((a*[1, 2, 3, 4][(b*c)])*d)"),
    ("-f(x)", "(-f(x))"),
    ("xs[0][1]", "xs[0][1]"),
    ("f(1)(2)", "f(1)(2)"),
])
def test_operator_precedence(source, expected):
    assert str(parse_program(source)) == expected


@pytest.mark.parametrize('source', [
    "let x = 1 + 2 * 3;",
    "fn add(a, b) { return a + b; }\nadd(1, 2);",
    "let f = fn(x) { if (x < 0) { return -x; } else { return x; } };",
    "let xs = [1, 2.5, \"three\", true]; xs[0];",
    "{ let y = 1; { y = y + 1; } }",
    "if (a == b) { } else { c; }",
])
def test_rendering_round_trips(source):
    rendered = str(parse_program(source))
    assert str(parse_program(rendered)) == rendered


def test_let_statement():
    program = parse_program("let x = 5;")
    (stmt,) = program.statements
    assert isinstance(stmt, Let)
    assert stmt.name.name == 'x'
    assert isinstance(stmt.value, IntegerLiteral)
    assert stmt.value.value == 5
    assert str(stmt) == 'let x = 5'


def test_assign_and_return_statements():
    assign, ret = parse_program("x = x + 1; return x").statements
    assert isinstance(assign, Assign)
    assert str(assign) == 'x = (x+1)'
    assert isinstance(ret, Return)
    assert str(ret) == 'return x'


def test_semicolons_are_optional_and_strays_are_skipped():
    program = parse_program(";; let a = 1\nlet b = 2;;; a")
    assert [type(s) for s in program.statements] == [Let, Let, ExpressionStatement]


def test_function_declaration_rendering():
    (decl,) = parse_program("fn add(a, b) { return a + b; }").statements
    assert isinstance(decl, FunctionDeclaration)
    assert decl.name.name == 'add'
    assert [p.name for p in decl.parameters] == ['a', 'b']
    assert str(decl) == "fn add(a, b) {\n  return (a+b)\n}"


def test_function_literal_and_empty_block():
    (stmt,) = parse_program("fn() {}").statements
    assert isinstance(stmt, ExpressionStatement)
    assert isinstance(stmt.expression, FunctionLiteral)
    assert stmt.expression.parameters == ()
    assert str(stmt) == "fn() {\n}"


def test_condition_with_else_rendering():
    (cond,) = parse_program("if (x > 1) { y; } else { z; }").statements
    assert isinstance(cond, Condition)
    assert isinstance(cond.if_false, Block)
    assert str(cond) == "if ((x>1)) {\n  y\n} else {\n  z\n}"


def test_condition_without_else():
    (cond,) = parse_program("if (true) { 1 }").statements
    assert cond.if_false is None


def test_nested_blocks_are_indented():
    (block,) = parse_program("{ let a = 1; if (a == 1) { a = 2; } }").statements
    assert str(block) == "{\n  let a = 1\n  if ((a==1)) {\n    a = 2\n  }\n}"


def test_call_and_index_nodes():
    (stmt,) = parse_program("f(1, 2)[0]").statements
    index = stmt.expression
    assert isinstance(index, Index)
    assert isinstance(index.collection, Call)
    assert len(index.collection.arguments) == 2


def test_prefix_and_infix_operators():
    (stmt,) = parse_program("-1 + 2").statements
    infix = stmt.expression
    assert isinstance(infix, Infix)
    assert infix.operator == '+'
    assert isinstance(infix.left, Prefix)
    assert infix.left.operator == '-'


def test_nodes_keep_their_tokens():
    (stmt,) = parse_program("\n  let x = 1;").statements
    assert stmt.token_literal() == 'let'
    assert str(stmt.token.position) == '2:3'
    assert str(stmt.value.token.position) == '2:11'


def test_empty_program():
    program = parse_program("")
    assert program.statements == ()
    assert str(program) == ''


def test_missing_identifier_in_let():
    (err,) = parse_errors("let = 5;")
    assert isinstance(err, UnexpectedToken)
    assert err.expected is TokenKind.IDENTIFIER
    assert err.actual.literal == '='
    assert str(err) == "UnexpectedToken: expected 'identifier', got '=' at 1:5"


def test_missing_value_in_let():
    (err,) = parse_errors("let x = ;")
    assert isinstance(err, InvalidToken)
    assert err.token.kind is TokenKind.SEMICOLON


def test_every_error_is_collected():
    errors = parse_errors("let = 1;\nlet y 2;\nlet z = 3;")
    assert len(errors) == 2
    assert [str(e.position) for e in errors] == ['1:5', '2:7']


def test_recovery_stops_at_statement_keyword():
    errors = parse_errors("let x 1 2 3 let y = ;")
    assert len(errors) == 2


def test_error_inside_function_body_is_reported_once():
    errors = parse_errors("fn f() { let = 1; return 2; }\nlet y = ;")
    assert len(errors) == 2
    assert [str(e.position) for e in errors] == ['1:14', '2:9']


def test_error_inside_condition_branch_is_reported_once():
    (err,) = parse_errors("if (true) { let = 1; }\nlet z = 3;")
    assert str(err.position) == '1:17'


def test_recovery_skips_the_else_branch_of_a_failed_condition():
    errors = parse_errors("if (true) { let = 1; } else { 2 }\nlet z = ;")
    assert len(errors) == 2


def test_recovery_from_nested_blocks():
    errors = parse_errors("fn f() { if (a) { let = 1; } return 2; }\nlet = 3;\nlet ok = 1;")
    assert [str(e.position) for e in errors] == ['1:23', '2:5']


def test_unexpected_end_of_input():
    (err,) = parse_errors("1 +")
    assert isinstance(err, UnexpectedEndOfInput)
    assert err.expected is None
    assert err.position is None


def test_unclosed_call_expects_right_paren():
    (err,) = parse_errors("foo(1, 2")
    assert isinstance(err, UnexpectedEndOfInput)
    assert err.expected is TokenKind.RIGHT_PAREN


def test_unclosed_block():
    (err,) = parse_errors("fn f() { return 1;")
    assert isinstance(err, UnexpectedEndOfInput)
    assert err.expected is TokenKind.RIGHT_CURLY


def test_illegal_character_is_invalid_token():
    (err,) = parse_errors("let a = 1; @")
    assert isinstance(err, InvalidToken)
    assert err.token.literal == '@'


def test_integer_literal_out_of_range():
    (err,) = parse_errors("99999999999999999999")
    assert isinstance(err, InvalidToken)


def test_colon_and_dot_are_not_accepted():
    assert len(parse_errors("a : b")) == 1
    assert len(parse_errors("1.2.3")) == 1


def test_parse_failed_message_lists_errors():
    with pytest.raises(ParseFailed) as info:
        parse_program("let = 1; let = 2;")
    assert str(info.value).splitlines() == [
        "UnexpectedToken: expected 'identifier', got '=' at 1:5",
        "UnexpectedToken: expected 'identifier', got '=' at 1:14",
    ]


def test_parser_records_errors_on_instance():
    parser = Parser(Lexer("let = 1;"))
    with pytest.raises(ParseFailed):
        parser.parse()
    assert len(parser.errors) == 1
