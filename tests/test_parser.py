import io

import pytest

from clopt.options import ArgRequirement, OptionBlock, OptionParseError
from clopt.parser import parse_options, parse_options_at


class Recorder:
    def __init__(self, results=None):
        self.calls = []
        self.results = results or {}

    def __call__(self, ctx):
        name = ctx.current_block.short_opt or ctx.current_block.long_opt
        self.calls.append((name, ctx.opt_arg, ctx.argv_index))
        return self.results.get(name, 0)


def make_blocks(rec):
    return [
        OptionBlock(rec, short_opt="h", long_opt="help", help_text="help"),
        OptionBlock(rec, ArgRequirement.OPTIONAL_ARG, short_opt="l", long_opt="logfile"),
        OptionBlock(rec, short_opt="a", id=0),
        OptionBlock(rec, short_opt="b", id=1),
        OptionBlock(rec, ArgRequirement.REQUIRED_ARG, short_opt="i", long_opt="integer"),
    ]


def run(argv, results=None, offset=1):
    rec = Recorder(results)
    err = io.StringIO()
    idx = parse_options_at(offset, ["prog", *argv], make_blocks(rec), None, err)
    return idx, rec.calls, err.getvalue()


def test_flags_then_argument():
    idx, calls, err = run(["-a", "-b", "file"])
    assert idx == 3
    assert [c[0] for c in calls] == ["a", "b"]
    assert err == ""


def test_clustered_short_flags():
    idx, calls, _ = run(["-ab"])
    assert idx == 2
    assert [c[0] for c in calls] == ["a", "b"]


def test_no_options_returns_offset():
    assert run([])[0] == 1
    assert run(["file"])[0] == 1


def test_negative_number_stops_parsing():
    idx, calls, _ = run(["-a", "-5", "-b"])
    assert idx == 2
    assert [c[0] for c in calls] == ["a"]


def test_long_required():
    idx, calls, _ = run(["--integer", "42", "x"])
    assert idx == 3
    assert calls == [("i", "42", 2)]


def test_long_required_missing():
    with pytest.raises(OptionParseError, match="missing argument of long option --integer"):
        run(["--integer"])


@pytest.mark.parametrize(
    "argv, expected",
    [
        (["--logfile"], None),
        (["--logfile", "x"], None),
        (["--logfile=out"], "out"),
        (["--logfile", "=out"], "out"),
        (["--logfile", "=", "out"], "out"),
        (["--logfile=", "out"], "out"),
    ],
)
def test_long_optional_forms(argv, expected):
    _, calls, _ = run(argv)
    assert calls[0][:2] == ("l", expected)


@pytest.mark.parametrize("argv", [["--logfile="], ["--logfile", "="]])
def test_long_optional_missing_after_equals(argv):
    with pytest.raises(OptionParseError, match="missing argument after '=' of long option --logfile"):
        run(argv)


@pytest.mark.parametrize(
    "argv, expected",
    [
        (["-l"], None),
        (["-l=out"], "out"),
        (["-l=", "out"], "out"),
        (["-l", "=out"], "out"),
        (["-l", "=", "out"], "out"),
    ],
)
def test_short_optional_forms(argv, expected):
    idx, calls, _ = run(argv)
    assert calls == [("l", expected, len(argv))]
    assert idx == len(argv) + 1


def test_short_optional_without_arg_continues_cluster():
    _, calls, _ = run(["-la"])
    assert [(c[0], c[1]) for c in calls] == [("l", None), ("a", None)]


@pytest.mark.parametrize("argv", [["-l="], ["-l", "="]])
def test_short_optional_missing_after_equals(argv):
    with pytest.raises(OptionParseError, match="missing argument after '=' of short option -l"):
        run(argv)


def test_short_required_inline_and_separate():
    _, calls, _ = run(["-i5"])
    assert calls == [("i", "5", 1)]
    idx, calls, _ = run(["-i", "7", "rest"])
    assert calls == [("i", "7", 2)]
    assert idx == 3


def test_short_required_after_flag_in_cluster():
    _, calls, _ = run(["-ai12"])
    assert [(c[0], c[1]) for c in calls] == [("a", None), ("i", "12")]


def test_short_required_missing():
    with pytest.raises(OptionParseError, match="missing argument for option 'i'"):
        run(["-i"])


def test_unrecognized_short_continues_then_fails():
    rec = Recorder()
    err = io.StringIO()
    with pytest.raises(OptionParseError, match="unrecognized option -z"):
        parse_options(["prog", "-zb", "-a"], make_blocks(rec), None, err)
    assert [c[0] for c in rec.calls] == ["b", "a"]
    assert "prog: unrecognized option -z" in err.getvalue()


def test_unrecognized_long_shows_whole_text():
    err = io.StringIO()
    with pytest.raises(OptionParseError):
        parse_options(["prog", "--nope=1"], make_blocks(Recorder()), None, err)
    assert "prog: unrecognized long option --nope=1" in err.getvalue()


def test_lone_dash_and_double_dash():
    with pytest.raises(OptionParseError, match=r"missing option -\?"):
        run(["-"])
    with pytest.raises(OptionParseError, match=r"missing long option --\?\?\?"):
        run(["--"])


def test_positive_callback_result_continues_but_fails():
    rec = Recorder({"a": 1})
    with pytest.raises(OptionParseError):
        parse_options(["prog", "-a", "-b"], make_blocks(rec), None, io.StringIO())
    assert [c[0] for c in rec.calls] == ["a", "b"]


def test_negative_callback_result_stops():
    rec = Recorder({"a": -1})
    with pytest.raises(OptionParseError):
        parse_options(["prog", "-a", "-b"], make_blocks(rec), None, io.StringIO())
    assert [c[0] for c in rec.calls] == ["a"]


def test_callback_exception_propagates():
    def boom(ctx):
        raise OptionParseError("bad value")

    blocks = [OptionBlock(boom, short_opt="x")]
    with pytest.raises(OptionParseError, match="bad value"):
        parse_options(["prog", "-x"], blocks, None, io.StringIO())


def test_user_data_and_context():
    seen = {}

    def cb(ctx):
        ctx.user["count"] += 1
        seen["blocks"] = ctx.blocks
        seen["prog"] = ctx.program_name
        return None

    blocks = [OptionBlock(cb, short_opt="v", long_opt="verbose")]
    data = {"count": 0}
    assert parse_options(["tool", "-v", "--verbose"], blocks, data, io.StringIO()) == 3
    assert data["count"] == 2
    assert seen["blocks"] is blocks
    assert seen["prog"] == "tool"


def test_mixed_order_loop():
    rec = Recorder()
    blocks = make_blocks(rec)
    argv = ["prog", "one", "-a", "two", "--integer", "3", "three"]
    found = []
    i = 1
    while i < len(argv):
        i = parse_options_at(i, argv, blocks, None, io.StringIO())
        if i < len(argv):
            found.append(argv[i])
        i += 1
    assert found == ["one", "two", "three"]
    assert [(c[0], c[1]) for c in rec.calls] == [("a", None), ("i", "3")]


def test_negative_offset_rejected():
    with pytest.raises(ValueError):
        parse_options_at(-1, ["prog"], make_blocks(Recorder()), None, io.StringIO())