from collections.abc import Mapping

from imgx.bootstrap.components import Components


def get_components(
        env: str = 'production',
        log_level: str | None = None,
        environ: Mapping[str, str] | None = None,
) -> Components:
    return Components(env, log_level=log_level, environ=environ)
