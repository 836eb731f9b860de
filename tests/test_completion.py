from __future__ import annotations

from patternshell.interface.completion import (
    AggregateCompleter,
    CompleterSet,
    FunctionCompleter,
    PrefixCompleter,
    StringsCompleter,
    TreeNode,
    build_completer,
    build_completers,
    build_tree,
)


def _same(candidates: list[str], expected: list[str]) -> bool:
    return sorted(candidates) == sorted(expected)


def test_strings_completer() -> None:
    completer = StringsCompleter(["asdf", "asdd", "bdf"])
    assert _same(completer.complete("a"), ["asdf", "asdd"])
    assert completer.complete("b") == ["bdf"]
    assert completer.complete("c") == []
    assert _same(completer.complete(""), ["asdf", "asdd", "bdf"])


def test_strings_completer_supplier_is_read_on_every_call() -> None:
    ids: list[str] = []
    completer = StringsCompleter(lambda: ids)
    assert completer.complete("n") == []
    ids.append("note-1")
    assert completer.complete("n") == ["note-1"]


def test_prefix_completer() -> None:
    completer = PrefixCompleter("asd lkj", StringsCompleter(["asdf", "asdd", "bdf"]))

    assert _same(completer.complete("asd lkj a"), ["asdf", "asdd"])
    assert completer.complete("asd lkj b") == ["bdf"]
    assert completer.complete("asd lkj c") == []

    for buffer in ("asd a", "asd b", "asd c", "a", "b", "c"):
        assert completer.complete(buffer) == []


def test_prefix_completer_with_arguments() -> None:
    completer = PrefixCompleter("some prefix <arg 1> with end <arg 2>", StringsCompleter(["one", "two", "three"]))

    buffer = "some prefix 'some json \"in quotes\" and text ' with end \"argument number two\" t"
    assert _same(completer.complete(buffer), ["two", "three"])
    assert completer.complete("some prefix \"arg 1\" with end arg-2 o") == ["one"]
    assert completer.complete("some prefix \"arg 1\" with end arg-2 a") == []

    assert completer.complete("some prefix 'some json \"in quotes\" and text ' with t") == []
    assert completer.complete("some prefix \"arg 1\" with o") == []
    for buffer in ("t", "o", "a"):
        assert completer.complete(buffer) == []


def test_aggregate_completer_keeps_first_seen_order_without_duplicates() -> None:
    completer = AggregateCompleter([StringsCompleter(["b", "a"]), lambda word: ["a", "c"]])
    assert completer.complete("") == ["b", "a", "c"]


def test_completer_set_wraps_callables() -> None:
    completers = CompleterSet({"id": lambda word: ["x1", "x2"]})
    assert len(completers) == 1
    assert isinstance(completers["id"], FunctionCompleter)
    assert completers.get_completer("missing") is None
    merged = completers.merged({"other": StringsCompleter(["y"])})
    assert sorted(merged) == ["id", "other"]
    assert list(completers) == ["id"]


def test_tree_node() -> None:
    root: TreeNode[str] = TreeNode()
    get = root.find_or_create_child("get")
    cluster = get.add_child("cluster")
    assert root.find_or_create_child("get") is get
    assert get.find_child("cluster") is cluster
    assert get.find_child("nope") is None
    assert cluster.path() == ["get", "cluster"]
    assert root.path() == []


def test_build_tree_merges_common_prefixes(make_command) -> None:
    root = build_tree([make_command("get cluster <id>"), make_command("get cluster-config <id>")])
    assert [child.data for child in root.children] == ["get"]
    get = root.children[0]
    assert [child.data for child in get.children] == ["cluster", "cluster-config"]
    assert [child.data for child in get.children[0].children] == ["<id>"]


def test_build_tree_flattens_optional_segments(make_command) -> None:
    root = build_tree([make_command("help [<command>]"), make_command("list [all] items")])
    help_node = root.find_child("help")
    assert help_node is not None
    assert [child.data for child in help_node.children] == ["<command>"]
    list_node = root.find_child("list")
    assert list_node is not None
    assert [child.data for child in list_node.children] == ["all", "items"]
    assert [child.data for child in list_node.children[0].children] == ["items"]


def test_completion_of_similar_prefixes(make_command) -> None:
    commands = [make_command("get cluster <id>"), make_command("get cluster-config <id>")]
    completer = build_completer(commands, {"id": StringsCompleter(["c1", "c2", "d1"])})

    assert completer.complete("") == ["get"]
    assert completer.complete("g") == ["get"]
    assert completer.complete("get c") == ["cluster", "cluster-config"]
    assert completer.complete("get cluster ") == ["c1", "c2", "d1"]
    assert completer.complete("get cluster-config c") == ["c1", "c2"]
    assert completer.complete("get cluster c1 ") == []


def test_argument_without_registered_completer_offers_nothing(make_command) -> None:
    providers = build_completers([make_command("echo <some-input>")])
    assert len(providers) == 1
    completer = build_completer([make_command("echo <some-input>")])
    assert completer.complete("echo ") == []
