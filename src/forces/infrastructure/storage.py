"""JSON persistence for the template registry and the session."""

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from loguru import logger
from pydantic import BaseModel, ValidationError

from forces.config import SESSION_FILE, TEMPLATES_FILE
from forces.domain.exceptions import SessionNotFoundError, StorageError
from forces.domain.models import DEFAULT_TEMPLATE_NAME, Session, Template, TemplateRegistry

CONFIG_DIR_MODE = 0o700
FILE_MODE = 0o644

DEFAULT_TEMPLATE_EXTENSION = ".cpp"
DEFAULT_RUN_COMMAND = "g++ -std=c++17 -O2 -o {problem} {source} && ./{problem}"
DEFAULT_TEMPLATE_SOURCE = """\
#include <bits/stdc++.h>
using namespace std;

int main() {
    ios::sync_with_stdio(false);
    cin.tie(nullptr);

    return 0;
}
"""


@dataclass(frozen=True)
class RegistryFound:
    registry: TemplateRegistry


@dataclass(frozen=True)
class RegistryAbsent:
    path: Path


@dataclass(frozen=True)
class RegistryCorrupt:
    path: Path
    detail: str


RegistryReadResult = Union[RegistryFound, RegistryAbsent, RegistryCorrupt]


def ensure_config_dir(config_dir: Path) -> Path:
    """Create the config directory (owner-only) if needed."""
    try:
        config_dir.mkdir(mode=CONFIG_DIR_MODE, parents=True, exist_ok=True)
    except OSError as e:
        raise StorageError(f"Cannot create config directory {config_dir}: {e}") from e
    return config_dir


def write_atomic(path: Path, data: bytes) -> None:
    """
    Replace path with data in one step.

    The content goes to a temporary file in the same directory which is then
    renamed over the target, so readers see either the old or the new file.
    """
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as tmp:
            tmp.write(data)
        os.chmod(tmp_name, FILE_MODE)
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise


def _save_model(path: Path, model: BaseModel) -> None:
    ensure_config_dir(path.parent)
    data = model.model_dump_json(indent=2).encode("utf-8")
    try:
        write_atomic(path, data)
    except OSError as e:
        raise StorageError(f"Failed to write {path}: {e}") from e
    logger.debug(f"Saved {path}")


def read_template_registry(path: Path) -> RegistryReadResult:
    """Read the registry, distinguishing a missing file from a broken one."""
    try:
        raw = path.read_bytes()
    except FileNotFoundError:
        return RegistryAbsent(path)
    except OSError as e:
        return RegistryCorrupt(path, f"cannot read file: {e}")

    try:
        return RegistryFound(TemplateRegistry.model_validate_json(raw))
    except ValidationError as e:
        return RegistryCorrupt(path, str(e))


def save_template_registry(config_dir: Path, registry: TemplateRegistry) -> None:
    _save_model(config_dir / TEMPLATES_FILE, registry)


def default_template(config_dir: Path) -> Template:
    """Return the bootstrap template, writing its source file if absent."""
    source = config_dir / f"{DEFAULT_TEMPLATE_NAME}{DEFAULT_TEMPLATE_EXTENSION}"
    if not source.exists():
        ensure_config_dir(config_dir)
        try:
            write_atomic(source, DEFAULT_TEMPLATE_SOURCE.encode("utf-8"))
        except OSError as e:
            raise StorageError(f"Failed to write default template {source}: {e}") from e
        logger.info(f"Created default template source {source}")

    return Template(
        name=DEFAULT_TEMPLATE_NAME,
        source_path=str(source),
        file_extension=DEFAULT_TEMPLATE_EXTENSION,
        run_command=DEFAULT_RUN_COMMAND,
    )


def load_or_init_template_registry(config_dir: Path) -> TemplateRegistry:
    """
    Load the template registry, bootstrapping defaults on first run.

    Only a missing registry file triggers bootstrap. Unreadable or invalid
    files raise StorageError rather than being replaced.
    """
    result = read_template_registry(config_dir / TEMPLATES_FILE)

    if isinstance(result, RegistryFound):
        registry = result.registry
        if registry.get_starter() is None:
            logger.warning(
                f"Starter template '{registry.starter_name}' is not registered, "
                f"falling back to '{DEFAULT_TEMPLATE_NAME}'"
            )
            if registry.get_template(DEFAULT_TEMPLATE_NAME) is None:
                registry.templates.append(default_template(config_dir))
            registry.starter_name = DEFAULT_TEMPLATE_NAME
            save_template_registry(config_dir, registry)
        return registry

    if isinstance(result, RegistryAbsent):
        logger.info(f"No template registry at {result.path}, creating default")
        registry = TemplateRegistry(
            starter_name=DEFAULT_TEMPLATE_NAME,
            templates=[default_template(config_dir)],
        )
        save_template_registry(config_dir, registry)
        return registry

    if isinstance(result, RegistryCorrupt):
        logger.error(f"Template registry {result.path} is corrupt: {result.detail}")
        raise StorageError(f"Template registry {result.path} is corrupt: {result.detail}")

    raise AssertionError(f"Unhandled registry read result: {result!r}")


def load_session(config_dir: Path) -> Session:
    """Load the current session; it must exist."""
    path = config_dir / SESSION_FILE
    try:
        raw = path.read_bytes()
    except FileNotFoundError as e:
        raise SessionNotFoundError(path) from e
    except OSError as e:
        raise StorageError(f"Cannot read session {path}: {e}") from e

    try:
        return Session.model_validate_json(raw)
    except ValidationError as e:
        raise StorageError(f"Session {path} is corrupt: {e}") from e


def save_session(config_dir: Path, session: Session) -> None:
    """Replace the stored session with this one."""
    _save_model(config_dir / SESSION_FILE, session)
