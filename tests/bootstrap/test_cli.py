import argparse
import json

import pytest
import yaml

from ketaring.bootstrap import cli
from ketaring.bootstrap.config.loader import build_parser
from ketaring.bootstrap.deps import get_dispatcher, get_renderer
from ketaring.core.errors import UnsupportedOperation
from ketaring.infra.format_renderer import JsonRenderer, YamlRenderer


def namespace(*argv: str) -> argparse.Namespace:
    return build_parser().parse_args(list(argv))


@pytest.fixture
def dispatcher():
    # Importing the command module registers its handlers.
    import ketaring.bootstrap.commands.ring  # noqa: F401
    return get_dispatcher()


@pytest.mark.ut
def test_parser_defaults():
    args = namespace("locate", "a", "b")

    assert args.command == "locate"
    assert args.keys == ["a", "b"]
    assert args.log_level == "WARNING"
    assert args.output == "yaml"
    assert args.config is None


@pytest.mark.ut
def test_parser_requires_a_command():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


@pytest.mark.ut
def test_locate_command(dispatcher, model):
    result = dispatcher.dispatch("locate", model=model, namespace=namespace("locate", "a", "b"))

    assert result == {
        "a": model.get_node_for_key(b"a").node_id,
        "b": model.get_node_for_key(b"b").node_id,
    }


@pytest.mark.ut
def test_replicas_command(dispatcher, model):
    args = namespace("replicas", "user:1", "--count", "3")
    result = dispatcher.dispatch("replicas", model=model, namespace=args)

    assert result == {
        "user:1": [n.node_id for n in model.get_nodes_for_key(b"user:1", 3)]
    }


@pytest.mark.ut
def test_ring_command(dispatcher, model):
    result = dispatcher.dispatch("ring", model=model, namespace=namespace("ring"))

    assert result["cluster"] == {
        "type": "consistent-hash",
        "nodes": 4,
        "replication_count": 13,
        "slots_per_node": 3,
        "vnodes": 48,
    }
    assert len(result["distribution"]) == 4
    assert all(v["vnodes"] == 12 for v in result["distribution"].values())


@pytest.mark.ut
def test_unknown_command_is_rejected(dispatcher, model):
    with pytest.raises(RuntimeError):
        dispatcher.dispatch("rebalance", model=model, namespace=argparse.Namespace())


@pytest.mark.ut
def test_renderers():
    data = {"a": ["x", b"y"]}

    assert isinstance(get_renderer("json"), JsonRenderer)
    assert isinstance(get_renderer("yaml"), YamlRenderer)
    assert yaml.safe_load(YamlRenderer().render(data)) == {"a": ["x", "y"]}
    assert json.loads(JsonRenderer().render({"a": 1})) == {"a": 1}


@pytest.mark.ut
def test_main_prints_rendered_result(monkeypatch, capsys, model):
    monkeypatch.setattr(cli, "get_cli_args", lambda: namespace("-o", "json", "locate", "k"))
    monkeypatch.setattr(cli, "get_model", lambda: model)

    cli.main()

    out = json.loads(capsys.readouterr().out)
    assert out == {"k": model.get_node_for_key(b"k").node_id}


@pytest.mark.ut
def test_main_exits_on_core_error(monkeypatch):
    def failing_model():
        raise UnsupportedOperation("modulo-hash clusters are not supported")

    monkeypatch.setattr(cli, "get_cli_args", lambda: namespace("ring"))
    monkeypatch.setattr(cli, "get_model", failing_model)

    with pytest.raises(SystemExit) as ex:
        cli.main()

    assert ex.value.code == 1
