"""Solution templates and the registry that holds them."""

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_TEMPLATE_NAME = "default"


class Template(BaseModel):
    """A reusable solution source file plus the command used to run it."""

    name: str
    source_path: str
    file_extension: str
    run_command: str

    model_config = ConfigDict(extra="forbid")


class TemplateRegistry(BaseModel):
    """Available templates and the one used for new solutions."""

    starter_name: str
    templates: list[Template] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")

    def get_template(self, name: str) -> Template | None:
        for template in self.templates:
            if template.name == name:
                return template
        return None

    def get_starter(self) -> Template | None:
        """Return the starter template, or None if starter_name is dangling."""
        return self.get_template(self.starter_name)
