"""Tests for the hook synchronizer."""

import stat
from pathlib import Path

import pytest

from enforce_hooks.core.models import HookAction, HookFile, HookMarker
from enforce_hooks.installer.sync import HookSourceError, HookSynchronizer

from conftest import PRE_COMMIT, PRE_PUSH


def test_install_copies_hooks(synchronizer, target_dir):
    """Hooks instalados são idênticos aos empacotados e executáveis."""
    report = synchronizer.install_hooks()

    assert [r.action for r in report.results] == [HookAction.INSTALLED, HookAction.INSTALLED]
    assert (target_dir / "pre-commit").read_bytes() == PRE_COMMIT
    assert (target_dir / "pre-push").read_bytes() == PRE_PUSH

    for name in ("pre-commit", "pre-push"):
        mode = stat.S_IMODE((target_dir / name).stat().st_mode)
        assert mode == 0o755

    assert report.exit_code == 0


def test_install_then_remove_scenario(synchronizer, target_dir):
    synchronizer.install_hooks()
    hook = target_dir / "pre-commit"

    assert hook.read_bytes() == b"#!/bin/sh\n# custom-hook\necho hi"
    assert hook.stat().st_mode & 0o111

    report = synchronizer.remove_managed_hooks()

    assert not hook.exists()
    assert not (target_dir / "pre-push").exists()
    assert len(report.removed) == 2


def test_install_is_idempotent(synchronizer, target_dir):
    synchronizer.install_hooks()
    before = {p.name: p.read_bytes() for p in target_dir.iterdir()}

    report = synchronizer.install_hooks()
    after = {p.name: p.read_bytes() for p in target_dir.iterdir()}

    assert before == after
    assert all(r.action == HookAction.SKIPPED for r in report.results)


def test_install_never_overwrites_existing_hook(synchronizer, target_dir):
    """Hook do usuário com o mesmo nome permanece intacto."""
    user_hook = target_dir / "pre-commit"
    user_hook.write_bytes(b"#!/bin/sh\necho mine\n")

    report = synchronizer.install_hooks()

    assert user_hook.read_bytes() == b"#!/bin/sh\necho mine\n"
    skipped = report.skipped
    assert [r.hook_name for r in skipped] == ["pre-commit"]
    assert skipped[0].message == "pre-commit já existe, pulando ..."
    assert (target_dir / "pre-push").read_bytes() == PRE_PUSH


def test_remove_keeps_unmarked_hooks(synchronizer, target_dir):
    user_hook = target_dir / "pre-commit"
    user_hook.write_bytes(b"#!/bin/sh\necho mine\n")

    report = synchronizer.remove_managed_hooks()

    assert user_hook.read_bytes() == b"#!/bin/sh\necho mine\n"
    actions = {r.hook_name: r.action for r in report.results}
    assert actions == {"pre-commit": HookAction.KEPT, "pre-push": HookAction.MISSING}


def test_remove_skips_hook_with_stripped_marker(synchronizer, target_dir):
    synchronizer.install_hooks()
    (target_dir / "pre-push").write_bytes(b"#!/bin/sh\n# edited by hand\nexit 0\n")

    synchronizer.remove_managed_hooks()

    assert not (target_dir / "pre-commit").exists()
    assert (target_dir / "pre-push").exists()


def test_install_lists_source_recursively(plugin_dir, target_dir):
    nested = plugin_dir / "hooks" / "extra"
    nested.mkdir()
    (nested / "commit-msg").write_bytes(b"#!/bin/sh\n# custom-hook\n")

    sync = HookSynchronizer(plugin_dir / "hooks", target_dir)
    report = sync.install_hooks()

    assert (target_dir / "commit-msg").exists()
    assert sorted(r.hook_name for r in report.installed) == ["commit-msg", "pre-commit", "pre-push"]


def test_install_creates_missing_target_dir(plugin_dir, tmp_path):
    target = tmp_path / "repo" / ".git" / "hooks"
    sync = HookSynchronizer(plugin_dir / "hooks", target)

    sync.install_hooks()

    assert (target / "pre-commit").read_bytes() == PRE_COMMIT


def test_install_leaves_no_temporary_files(synchronizer, target_dir):
    synchronizer.install_hooks()

    assert sorted(p.name for p in target_dir.iterdir()) == ["pre-commit", "pre-push"]


def test_missing_source_dir_is_fatal(tmp_path, target_dir):
    sync = HookSynchronizer(tmp_path / "nope", target_dir)

    with pytest.raises(HookSourceError):
        sync.install_hooks()

    with pytest.raises(HookSourceError):
        sync.remove_managed_hooks()


def test_write_failure_does_not_stop_siblings(synchronizer, target_dir, monkeypatch):
    original = HookSynchronizer._write_hook

    def failing_write(self, hook_path, content):
        if hook_path.name == "pre-commit":
            raise PermissionError("permission denied")
        return original(self, hook_path, content)

    monkeypatch.setattr(HookSynchronizer, "_write_hook", failing_write)

    report = synchronizer.install_hooks()

    assert [r.hook_name for r in report.errors] == ["pre-commit"]
    assert "permission denied" in report.errors[0].message
    assert (target_dir / "pre-push").exists()
    assert not (target_dir / "pre-commit").exists()
    assert report.has_errors
    assert report.exit_code == 1


def test_unreadable_source_hook_does_not_stop_siblings(synchronizer, target_dir, monkeypatch):
    original = HookFile.read.__func__

    def failing_read(cls, path, marker):
        if path.name == "pre-commit":
            raise PermissionError("permission denied")
        return original(cls, path, marker)

    monkeypatch.setattr(HookFile, "read", classmethod(failing_read))

    report = synchronizer.install_hooks()

    assert [r.hook_name for r in report.errors] == ["pre-commit"]
    assert "Erro ao ler hook empacotado" in report.errors[0].message
    assert [r.hook_name for r in report.installed] == ["pre-push"]
    assert (target_dir / "pre-push").read_bytes() == PRE_PUSH
    assert not (target_dir / "pre-commit").exists()
    assert report.exit_code == 1


def test_remove_read_failure_does_not_stop_siblings(synchronizer, target_dir, monkeypatch):
    synchronizer.install_hooks()
    original = HookFile.read.__func__

    def failing_read(cls, path, marker):
        if path.name == "pre-commit":
            raise PermissionError("permission denied")
        return original(cls, path, marker)

    monkeypatch.setattr(HookFile, "read", classmethod(failing_read))

    report = synchronizer.remove_managed_hooks()

    assert [r.hook_name for r in report.errors] == ["pre-commit"]
    assert "Erro ao ler hook" in report.errors[0].message
    assert [r.hook_name for r in report.removed] == ["pre-push"]
    assert (target_dir / "pre-commit").exists()
    assert not (target_dir / "pre-push").exists()
    assert report.exit_code == 1


def test_remove_delete_failure_does_not_stop_siblings(synchronizer, target_dir, monkeypatch):
    synchronizer.install_hooks()
    original = Path.unlink

    def failing_unlink(self, *args, **kwargs):
        if self.name == "pre-commit":
            raise PermissionError("permission denied")
        return original(self, *args, **kwargs)

    monkeypatch.setattr(Path, "unlink", failing_unlink)

    report = synchronizer.remove_managed_hooks()

    assert [r.hook_name for r in report.errors] == ["pre-commit"]
    assert "Erro ao remover hook" in report.errors[0].message
    assert [r.hook_name for r in report.removed] == ["pre-push"]
    assert (target_dir / "pre-commit").exists()
    assert not (target_dir / "pre-push").exists()
    assert report.exit_code == 1


def test_custom_file_mode(plugin_dir, target_dir):
    sync = HookSynchronizer(plugin_dir / "hooks", target_dir, file_mode=0o700)
    sync.install_hooks()

    assert stat.S_IMODE((target_dir / "pre-commit").stat().st_mode) == 0o700


def test_status(synchronizer, target_dir):
    synchronizer.install_hooks()
    (target_dir / "pre-push").write_bytes(b"#!/bin/sh\n# custom-hook\necho changed\n")

    statuses = {s.hook_name: s for s in synchronizer.status()}

    assert statuses["pre-commit"].installed
    assert statuses["pre-commit"].managed
    assert statuses["pre-commit"].executable
    assert statuses["pre-commit"].up_to_date
    assert statuses["pre-push"].managed
    assert not statuses["pre-push"].up_to_date


def test_status_not_installed(synchronizer):
    statuses = synchronizer.status()

    assert [s.installed for s in statuses] == [False, False]


class TestHookMarker:
    def test_unanchored_matches_anywhere(self):
        marker = HookMarker()

        assert marker.matches(b"#!/bin/sh\n# custom-hook\n")
        assert marker.matches(b"echo '# custom-hook'\n")
        assert not marker.matches(b"#!/bin/sh\necho hi\n")

    def test_anchored_requires_line_start(self):
        marker = HookMarker(anchored=True)

        assert marker.matches(b"#!/bin/sh\n# custom-hook\n")
        assert marker.matches(b"#!/bin/sh\n    # custom-hook\n")
        assert not marker.matches(b"echo '# custom-hook'\n")

    def test_custom_token_is_literal(self):
        marker = HookMarker(token="# managed (v1)")

        assert marker.matches(b"# managed (v1)\n")
        assert not marker.matches(b"# managed v1\n")

    def test_empty_token_rejected(self):
        with pytest.raises(ValueError):
            HookMarker(token="  ")
