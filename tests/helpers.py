import os

from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, YamlConfigSettingsSource

from ketaring.bootstrap.config.settings import KetaringConfig
from ketaring.core.space.hashing import KetamaHash


class FakeKetaringConfig(KetaringConfig, BaseSettings):
    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (YamlConfigSettingsSource(settings_cls, yaml_file=os.environ["TEST_KETARINGCONFIG"]),)


class FixedKeyHash(KetamaHash):
    """Ketama hash whose lookup token is pinned, vnode tokens are untouched."""
    def __init__(self, token: int) -> None:
        super().__init__()
        self._token = token

    def hash_key(self, key: bytes) -> int:
        return self._token


class CollidingHash(KetamaHash):
    """Ketama hash placing every vnode on the same token."""
    def hash_chunk(self, digest: bytes, chunk: int) -> int:
        return 42


class NotChunkedHash:
    def hash_key(self, key: bytes) -> int:
        return 0
