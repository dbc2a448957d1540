from __future__ import annotations

from pathlib import Path
from textwrap import dedent

import pytest

from devcontrol.domain.launch import AttachMode
from devcontrol.domain.stack import StackDescriptor, StackDescriptorError


def test_packaged_default_stack(tmp_path: Path) -> None:
    stack = StackDescriptor.load(tmp_path)

    assert stack.source is None
    assert stack.compose_files == ("docker-compose.yml", "docker-compose.dev.yml")
    assert stack.db_volume == "baserow_pgdata"
    assert [spec.title for spec in stack.services] == [
        "backend",
        "web frontend",
        "celery",
        "export worker",
        "beat worker",
        "web frontend lint",
        "backend lint",
    ]
    lint = stack.services[-1]
    assert lint.mode is AttachMode.EXEC
    assert lint.service == "backend"
    assert lint.exec_command.endswith("lint-shell")
    stack.ensure_compatible("0.3.0")


def test_project_descriptor_overrides_defaults(tmp_path: Path) -> None:
    (tmp_path / "devcall.yaml").write_text(
        dedent(
            """
            db_volume: app_pgdata
            services:
              - title: api
                service: api
              - title: api shell
                service: api
                exec: /bin/bash
            """
        ).lstrip(),
        encoding="utf-8",
    )
    stack = StackDescriptor.load(tmp_path)

    assert stack.source == tmp_path / "devcall.yaml"
    assert stack.db_volume == "app_pgdata"
    assert stack.compose_files == ("docker-compose.yml", "docker-compose.dev.yml")
    assert [(spec.title, spec.mode) for spec in stack.services] == [
        ("api", AttachMode.LOGS),
        ("api shell", AttachMode.EXEC),
    ]


def test_schema_errors_are_reported(tmp_path: Path) -> None:
    (tmp_path / "devcall.yaml").write_text("services:\n  - title: api\n", encoding="utf-8")
    with pytest.raises(StackDescriptorError) as excinfo:
        StackDescriptor.load(tmp_path)
    assert "service" in str(excinfo.value)


def test_non_mapping_descriptor_rejected(tmp_path: Path) -> None:
    (tmp_path / "devcall.yaml").write_text("- up\n", encoding="utf-8")
    with pytest.raises(StackDescriptorError):
        StackDescriptor.load(tmp_path)


def test_requires_specifier_checked() -> None:
    stack = StackDescriptor.from_dict({"requires": ">=9.0"})
    with pytest.raises(StackDescriptorError, match="requires devcall >=9.0"):
        stack.ensure_compatible("0.3.0")

    broken = StackDescriptor.from_dict({"requires": "not a specifier"})
    with pytest.raises(StackDescriptorError, match="Invalid 'requires'"):
        broken.ensure_compatible("0.3.0")
