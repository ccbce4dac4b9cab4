"""Editing operations on the template registry."""

from pathlib import Path

from loguru import logger

from forces.domain.exceptions import TemplateError
from forces.domain.models import Template, TemplateRegistry
from forces.infrastructure.storage import load_or_init_template_registry, save_template_registry


class TemplateService:
    """Loads, edits and persists the template registry."""

    def __init__(self, config_dir: Path):
        self.config_dir = config_dir

    def load(self) -> TemplateRegistry:
        return load_or_init_template_registry(self.config_dir)

    def add_template(
        self,
        name: str,
        source_path: str | Path,
        file_extension: str,
        run_command: str,
    ) -> Template:
        """Register a new template; its source file must already exist."""
        registry = self.load()
        if registry.get_template(name) is not None:
            raise TemplateError(f"Template '{name}' already exists")

        source = Path(source_path).expanduser().resolve()
        if not source.is_file():
            raise TemplateError(f"Template source {source} does not exist")

        if not file_extension.startswith("."):
            file_extension = f".{file_extension}"

        template = Template(
            name=name,
            source_path=str(source),
            file_extension=file_extension,
            run_command=run_command,
        )
        registry.templates.append(template)
        save_template_registry(self.config_dir, registry)

        logger.info(f"Added template '{name}' ({source})")
        return template

    def remove_template(self, name: str) -> None:
        registry = self.load()
        if registry.get_template(name) is None:
            raise TemplateError(f"Template '{name}' does not exist")
        if registry.starter_name == name:
            raise TemplateError(
                f"Template '{name}' is the starter; choose another starter before removing it"
            )

        registry.templates = [t for t in registry.templates if t.name != name]
        save_template_registry(self.config_dir, registry)
        logger.info(f"Removed template '{name}'")

    def set_starter(self, name: str) -> None:
        registry = self.load()
        if registry.get_template(name) is None:
            raise TemplateError(f"Template '{name}' does not exist")

        registry.starter_name = name
        save_template_registry(self.config_dir, registry)
        logger.info(f"Starter template is now '{name}'")
