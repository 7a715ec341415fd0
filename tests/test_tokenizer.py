import pytest

from symbolic_calculus.tokenizer import Token, TokenType, tokenize


def kinds(tokens):
    return [token.type for token in tokens]


def values(tokens):
    return [token.value for token in tokens]


class TestBasicTokens:
    def test_numbers_operators_and_variables(self):
        tokens = tokenize("3.5 * x + 12")

        assert kinds(tokens) == [
            TokenType.NUMBER, TokenType.OPERATOR, TokenType.VARIABLE,
            TokenType.OPERATOR, TokenType.NUMBER,
        ]
        assert values(tokens) == ["3.5", "*", "x", "+", "12"]

    def test_whitespace_is_skipped(self):
        assert values(tokenize("  x\t^ 2\n")) == ["x", "^", "2"]

    def test_functions_and_constants(self):
        tokens = tokenize("sin(pi) + e")

        assert tokens[0] == Token(TokenType.FUNCTION, "sin")
        assert tokens[2] == Token(TokenType.CONSTANT, "pi")
        assert tokens[-1] == Token(TokenType.CONSTANT, "e")

    def test_longest_function_name_wins(self):
        assert tokenize("sinh(x)")[0] == Token(TokenType.FUNCTION, "sinh")

    def test_function_name_must_be_a_whole_word(self):
        assert tokenize("sinx") == [Token(TokenType.VARIABLE, "sinx")]
        assert tokenize("epi") == [Token(TokenType.VARIABLE, "epi")]

    def test_letter_runs_form_one_variable(self):
        assert tokenize("xy") == [Token(TokenType.VARIABLE, "xy")]

    def test_equals_and_parentheses(self):
        assert kinds(tokenize("(y) = 2")) == [
            TokenType.PARENTHESIS, TokenType.VARIABLE, TokenType.PARENTHESIS,
            TokenType.EQUALS, TokenType.NUMBER,
        ]

    def test_unknown_characters_are_reported_as_unknown(self):
        tokens = tokenize("x # 2")

        assert tokens[1] == Token(TokenType.UNKNOWN, "#")

    def test_empty_input(self):
        assert tokenize("") == []


class TestNegativeLiterals:
    def test_leading_minus_merges_with_number(self):
        assert tokenize("-3+x") == [
            Token(TokenType.NUMBER, "-3"),
            Token(TokenType.OPERATOR, "+"),
            Token(TokenType.VARIABLE, "x"),
        ]

    def test_binary_minus_stays_an_operator(self):
        assert tokenize("5-3") == [
            Token(TokenType.NUMBER, "5"),
            Token(TokenType.OPERATOR, "-"),
            Token(TokenType.NUMBER, "3"),
        ]

    def test_minus_after_operator(self):
        assert values(tokenize("2*-3")) == ["2", "*", "-3"]

    def test_minus_after_open_parenthesis(self):
        assert values(tokenize("(-2.5)")) == ["(", "-2.5", ")"]

    def test_minus_after_close_parenthesis_is_binary(self):
        assert values(tokenize("(x)-2")) == ["(", "x", ")", "-", "2"]

    def test_minus_before_variable_stays_an_operator(self):
        assert tokenize("-x") == [
            Token(TokenType.OPERATOR, "-"),
            Token(TokenType.VARIABLE, "x"),
        ]

    def test_trailing_minus_is_kept(self):
        assert tokenize("2*-")[-1] == Token(TokenType.OPERATOR, "-")


class TestModulus:
    def test_bar_is_a_modulus_delimiter(self):
        assert kinds(tokenize("|x|")) == [
            TokenType.MODULUS_DELIMITER, TokenType.VARIABLE, TokenType.MODULUS_DELIMITER,
        ]

    def test_minus_right_after_opening_bar_is_negative(self):
        assert values(tokenize("|-3|")) == ["|", "-3", "|"]

    def test_minus_right_after_closing_bar_is_binary(self):
        assert values(tokenize("|x|-3")) == ["|", "x", "|", "-", "3"]


class TestRegistryDependence:
    def test_names_come_from_the_given_registry(self, registry):
        registry.add_constant("tau", 6.283185307179586)

        assert tokenize("tau", registry) == [Token(TokenType.CONSTANT, "tau")]
        # the process-wide registry does not know it
        assert tokenize("tau") == [Token(TokenType.VARIABLE, "tau")]

    def test_after_shutdown_functions_are_plain_variables(self, global_registry):
        global_registry.shutdown()

        assert tokenize("sin")[0] == Token(TokenType.VARIABLE, "sin")

    @pytest.mark.parametrize("name", [
        "sin", "cos", "tan", "cot", "sec", "csc", "sinh", "cosh", "tanh",
        "coth", "sech", "csch", "log", "ln", "exp", "sqrt", "abs",
    ])
    def test_every_builtin_function_is_recognised(self, name):
        assert tokenize(f"{name}(x)")[0] == Token(TokenType.FUNCTION, name)
