import pytest

from asabr.file_lexer import FileLexer


@pytest.fixture
def plan_file(tmp_path):
    path = tmp_path / "plan.cp"
    path.write_text(
        "# a comment line\n"
        "node 0 alpha none\n"
        "\n"
        "   # indented comment\n"
        "contact 0 1 0 10\n"
    )
    return path


def _drain(lexer):
    tokens = []
    while (token := lexer.consume_next_token()) is not None:
        tokens.append(token)
    return tokens


def test_tokens_skip_comments_and_blank_lines(plan_file):
    with FileLexer(plan_file) as lexer:
        assert _drain(lexer) == [
            "node", "0", "alpha", "none", "contact", "0", "1", "0", "10",
        ]


def test_end_of_input_returns_none(plan_file):
    with FileLexer(plan_file) as lexer:
        _drain(lexer)
        assert lexer.consume_next_token() is None
        assert lexer.lookup() is None


def test_lookup_does_not_consume(plan_file):
    with FileLexer(plan_file) as lexer:
        assert lexer.lookup() == "node"
        assert lexer.lookup() == "node"
        assert lexer.consume_next_token() == "node"
        assert lexer.lookup() == "0"


def test_lookup_does_not_move_position(plan_file):
    with FileLexer(plan_file) as lexer:
        assert lexer.lookup() == "node"
        assert lexer.current_position == "line 0, token 0"


def test_position_tracks_lines_and_tokens(plan_file):
    with FileLexer(plan_file) as lexer:
        assert lexer.current_position == "line 0, token 0"
        lexer.consume_next_token()
        assert lexer.current_position == "line 2, token 1"
        lexer.consume_next_token()
        lexer.consume_next_token()
        assert lexer.current_position == "line 2, token 3"
        for _ in range(2):
            lexer.consume_next_token()
        assert lexer.current_position == "line 5, token 1"


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        FileLexer(tmp_path / "absent.cp")


def test_empty_file_is_immediately_exhausted(tmp_path):
    path = tmp_path / "empty.cp"
    path.write_text("# only a comment\n\n")
    with FileLexer(path) as lexer:
        assert lexer.lookup() is None
        assert lexer.consume_next_token() is None
        assert lexer.current_position == "line 0, token 0"