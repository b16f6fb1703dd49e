from typing import Annotated

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict, PydanticBaseSettingsSource, YamlConfigSettingsSource

from ketaring.bootstrap.config.loader import get_configfile
from ketaring.core.models.cluster import ClusterNodeSpec, ClusterSpec, ClusterType


class NodeSettings(BaseModel):
    host: Annotated[
        str,
        Field(
            description=(
                "Hostname or IP address of the node.\n"
                "Together with the port, it forms the node identity on the ring:\n"
                "changing it moves every vnode of the node and remaps its keys."
            )
        )
    ]

    port: Annotated[
        int,
        Field(
            description="TCP port of the node.",
            default=6379,
            gt=0,
            le=65535
        )
    ]

    db: Annotated[
        int,
        Field(
            description="Logical database selected on the node.",
            default=0,
            ge=0
        )
    ]

    def to_spec(self) -> ClusterNodeSpec:
        return ClusterNodeSpec(host=self.host, port=self.port, db=self.db)


class ClusterSettings(BaseModel):
    type: Annotated[
        ClusterType,
        Field(
            description=(
                "Distribution strategy of the cluster.\n"
                "Only 'consistent-hash' clusters can be served by the Ketama model."
            ),
            default=ClusterType.consistent_hash
        )
    ]

    nodes: Annotated[
        list[NodeSettings],
        Field(
            description=(
                "Static list of cluster nodes.\n"
                "The ring is computed once from this list; nodes cannot be added\n"
                "or removed without building a new ring."
            ),
            min_length=1
        )
    ]

    def to_spec(self) -> ClusterSpec:
        return ClusterSpec.of((node.to_spec() for node in self.nodes), self.type)


class KetamaSettings(BaseModel):
    replication_constant: Annotated[
        float,
        Field(
            description=(
                "Constant k of the replication count k * ln(node count).\n"
                "Each node receives (replication count // 4) digests, each digest\n"
                "yielding four vnodes."
            ),
            default=10.0,
            gt=0
        )
    ]

    min_slots_per_node: Annotated[
        int,
        Field(
            description=(
                "Lower bound on the number of digests per node.\n"
                "Small clusters (e.g. a single node) have a replication count\n"
                "below 4 and would otherwise place no vnode at all."
            ),
            default=1,
            ge=0
        )
    ]


class KetaringConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="KETARING_",
        extra="allow"
    )

    cluster: Annotated[
        ClusterSettings,
        Field(
            description=(
                "Cluster description.\n"
                "Defines the cluster type and the static node set the ring is\n"
                "built from."
            )
        )
    ]

    ketama: Annotated[
        KetamaSettings,
        Field(
            description="Tuning of the Ketama ring construction.",
            default_factory=KetamaSettings
        )
    ]

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (YamlConfigSettingsSource(settings_cls, yaml_file=get_configfile()),)
