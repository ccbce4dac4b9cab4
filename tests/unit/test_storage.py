"""Unit tests for template registry and session persistence."""

import json
from pathlib import Path

import pytest

from forces.domain.exceptions import SessionNotFoundError, StorageError
from forces.domain.models import (
    ProblemState,
    Session,
    SubmitVerdict,
    SubmitVerdictLabel,
    Template,
    TemplateRegistry,
    TestVerdict,
)
from forces.infrastructure.storage import (
    RegistryAbsent,
    RegistryCorrupt,
    RegistryFound,
    load_or_init_template_registry,
    load_session,
    read_template_registry,
    save_session,
    save_template_registry,
)


def _registry():
    return TemplateRegistry(
        starter_name="py",
        templates=[
            Template(name="cpp", source_path="/t/a.cpp", file_extension=".cpp", run_command="x"),
            Template(
                name="py",
                source_path="/t/a.py",
                file_extension=".py",
                run_command="python3 {source}",
            ),
        ],
    )


class TestTemplateRegistryStorage:
    def test_round_trip_preserves_registry(self, tmp_path):
        registry = _registry()

        save_template_registry(tmp_path, registry)
        result = read_template_registry(tmp_path / "templates.json")

        assert isinstance(result, RegistryFound)
        assert result.registry == registry

    def test_read_missing_file_is_absent(self, tmp_path):
        result = read_template_registry(tmp_path / "templates.json")

        assert isinstance(result, RegistryAbsent)

    def test_read_invalid_json_is_corrupt(self, tmp_path):
        (tmp_path / "templates.json").write_text("{not json")

        result = read_template_registry(tmp_path / "templates.json")

        assert isinstance(result, RegistryCorrupt)

    def test_bootstrap_creates_default_template(self, tmp_path):
        config_dir = tmp_path / "config"

        registry = load_or_init_template_registry(config_dir)

        starter = registry.get_starter()
        assert registry.starter_name == "default"
        assert starter is not None
        assert Path(starter.source_path) == config_dir / "default.cpp"
        assert (config_dir / "default.cpp").read_text().startswith("#include")
        assert (config_dir / "templates.json").exists()
        assert config_dir.stat().st_mode & 0o777 == 0o700

    def test_bootstrap_keeps_existing_default_source(self, tmp_path):
        (tmp_path / "default.cpp").write_text("// customised\n")

        load_or_init_template_registry(tmp_path)

        assert (tmp_path / "default.cpp").read_text() == "// customised\n"

    def test_existing_registry_is_loaded_not_replaced(self, tmp_path):
        save_template_registry(tmp_path, _registry())

        assert load_or_init_template_registry(tmp_path) == _registry()

    def test_corrupt_registry_is_fatal(self, tmp_path):
        (tmp_path / "templates.json").write_text(json.dumps({"starter": "x"}))

        with pytest.raises(StorageError):
            load_or_init_template_registry(tmp_path)

        assert json.loads((tmp_path / "templates.json").read_text()) == {"starter": "x"}

    def test_dangling_starter_heals_to_default(self, tmp_path):
        registry = _registry()
        registry.starter_name = "rust"
        save_template_registry(tmp_path, registry)

        healed = load_or_init_template_registry(tmp_path)

        assert healed.starter_name == "default"
        assert healed.get_starter() is not None
        assert [t.name for t in healed.templates] == ["cpp", "py", "default"]


class TestSessionStorage:
    def test_round_trip(self, tmp_path):
        session = Session(
            working_directory=tmp_path / "1720",
            problems=[
                ProblemState(
                    problem_id="A",
                    template_name="default",
                    test_verdict=TestVerdict(passed=1, total=2),
                    submit_verdict=SubmitVerdict(
                        label=SubmitVerdictLabel.WRONG_ANSWER, message="test 3"
                    ),
                )
            ],
        )

        save_session(tmp_path, session)

        assert load_session(tmp_path) == session

    def test_missing_session(self, tmp_path):
        with pytest.raises(SessionNotFoundError):
            load_session(tmp_path)

    def test_corrupt_session(self, tmp_path):
        (tmp_path / "session.json").write_text("[]")

        with pytest.raises(StorageError):
            load_session(tmp_path)

    def test_save_replaces_whole_file(self, tmp_path):
        first = Session(
            working_directory=tmp_path / "1",
            problems=[ProblemState(problem_id="A", template_name="d", test_verdict=TestVerdict(total=1))],
        )
        second = Session(working_directory=tmp_path / "2", problems=[])

        save_session(tmp_path, first)
        save_session(tmp_path, second)

        assert load_session(tmp_path) == second
        assert [p.name for p in tmp_path.iterdir()] == ["session.json"]

    def test_failed_save_keeps_previous_file(self, tmp_path, monkeypatch):
        first = Session(working_directory=tmp_path / "1", problems=[])
        save_session(tmp_path, first)
        before = (tmp_path / "session.json").read_bytes()

        def fail_replace(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr("forces.infrastructure.storage.os.replace", fail_replace)

        with pytest.raises(StorageError):
            save_session(tmp_path, Session(working_directory=tmp_path / "2", problems=[]))

        assert (tmp_path / "session.json").read_bytes() == before
        assert [p.name for p in tmp_path.iterdir()] == ["session.json"]
