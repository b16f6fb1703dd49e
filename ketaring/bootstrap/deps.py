import json
from functools import lru_cache

from pydantic import ValidationError

from ketaring.bootstrap.config.settings import KetaringConfig
from ketaring.core.cluster.ketama import KetamaClusterModel
from ketaring.core.dispatcher import CommandDispatcher
from ketaring.core.ports.render import Renderer
from ketaring.infra.format_renderer import JsonRenderer, YamlRenderer


def build_model(config: KetaringConfig) -> KetamaClusterModel:
    return KetamaClusterModel(
        config.cluster.to_spec(),
        replication_constant=config.ketama.replication_constant,
        min_slots_per_node=config.ketama.min_slots_per_node,
    )


@lru_cache
def get_model() -> KetamaClusterModel:
    return build_model(get_config())


@lru_cache
def get_dispatcher() -> CommandDispatcher:
    return CommandDispatcher()


def get_renderer(output: str) -> Renderer:
    if output == "json":
        return JsonRenderer()
    return YamlRenderer()


@lru_cache
def get_config() -> KetaringConfig:
    try:
        return KetaringConfig()  # type: ignore[call-arg]
    except FileNotFoundError as ex:
        raise SystemExit(f"Provide a correct configuration file path: {ex}")
    except ValidationError as ex:
        msg = ["Configuration validation failed:"]
        errs = json.loads(ex.json())
        for err in errs:
            msg.append(f"  {'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}")
        raise SystemExit("\n".join(msg))
