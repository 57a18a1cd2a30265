from pathlib import Path

from vfs_platform.config.env_loader import load_env_file


def _write_env(root: Path, name: str, text: str) -> None:
    env_dir = root / ".env"
    env_dir.mkdir(exist_ok=True)
    (env_dir / f"{name}.env").write_text(text)


def test_load_valid_env_file(tmp_path: Path):
    _write_env(tmp_path, "local", "FS_IMPL=local\nFS_LOCAL_ROOT=/data\n")
    result = load_env_file("local", project_root=tmp_path)
    assert result == {"FS_IMPL": "local", "FS_LOCAL_ROOT": "/data"}


def test_load_missing_file_returns_empty(tmp_path: Path):
    assert load_env_file("nonexistent", project_root=tmp_path) == {}


def test_comments_blank_lines_and_junk(tmp_path: Path):
    _write_env(tmp_path, "test", "# a comment\n\nKEY=val\n  # another\nnot a pair\n")
    assert load_env_file("test", project_root=tmp_path) == {"KEY": "val"}


def test_quoted_values(tmp_path: Path):
    _write_env(tmp_path, "test", 'SINGLE=\'hello\'\nDOUBLE="world"\n')
    result = load_env_file("test", project_root=tmp_path)
    assert result == {"SINGLE": "hello", "DOUBLE": "world"}


def test_export_prefix(tmp_path: Path):
    _write_env(tmp_path, "test", "export LOG_LEVEL=DEBUG\n")
    assert load_env_file("test", project_root=tmp_path) == {"LOG_LEVEL": "DEBUG"}


def test_value_with_equals_sign(tmp_path: Path):
    _write_env(tmp_path, "test", "FS_LOCAL_ROOT=/mnt/a=b\n")
    assert load_env_file("test", project_root=tmp_path) == {"FS_LOCAL_ROOT": "/mnt/a=b"}
