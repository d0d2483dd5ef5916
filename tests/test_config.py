import json

import pytest

from blog.config import PACKAGE_CONTENT_DIR, AppConfig, load_config, resolve_path


def test_defaults():
    config = load_config(None)
    assert config.content.content_roots == [str(PACKAGE_CONTENT_DIR)]
    assert config.lint.required_fields == ["Title", "Date", "Category", "Slug"]
    assert config.lint.allowed_schemes == ["http", "https", "mailto"]
    assert config.output.export_path == "build/documents.jsonl"
    assert config.logging.level == "INFO"


def test_yaml_config_merges_over_defaults(tmp_path):
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text(
        """
content:
  content_roots: [posts]
lint:
  strict: true
  allowed_schemes: [https]
""",
        encoding="utf-8",
    )
    config = load_config(cfg)

    assert config.content.content_roots == [str((tmp_path / "posts").resolve())]
    assert config.content.file_extensions == [".md", ".markdown"]
    assert config.lint.strict is True
    assert config.lint.allowed_schemes == ["https"]
    assert config.lint.required_fields == ["Title", "Date", "Category", "Slug"]


def test_json_config(tmp_path):
    cfg = tmp_path / "cfg.json"
    cfg.write_text(json.dumps({"output": {"export_path": "out.jsonl"}}), encoding="utf-8")
    assert load_config(cfg).output.export_path == str((tmp_path / "out.jsonl").resolve())


def test_empty_yaml_gives_defaults(tmp_path):
    cfg = tmp_path / "empty.yaml"
    cfg.write_text("", encoding="utf-8")
    assert load_config(cfg) == load_config(None)


def test_missing_config_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


def test_unknown_section_raises(tmp_path):
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text("templates: {}\n", encoding="utf-8")
    with pytest.raises(ValueError, match="templates"):
        load_config(cfg)


def test_unknown_key_raises(tmp_path):
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text("lint:\n  colour: red\n", encoding="utf-8")
    with pytest.raises(ValueError, match="colour"):
        load_config(cfg)


def test_env_overrides_log_level(tmp_path, monkeypatch):
    monkeypatch.setenv("BLOG_LOG_LEVEL", "DEBUG")
    assert load_config(None).logging.level == "DEBUG"


def test_config_is_frozen():
    config = AppConfig()
    with pytest.raises(Exception):
        config.lint = None


def test_resolve_path(tmp_path):
    assert resolve_path("/abs/path") == resolve_path("/abs/path", tmp_path)
    assert resolve_path("rel", tmp_path) == (tmp_path / "rel").resolve()


def test_example_config_points_at_packaged_content():
    example = PACKAGE_CONTENT_DIR.parent.parent / "config.example.yaml"
    config = load_config(example)
    assert config.content.content_roots == [str(PACKAGE_CONTENT_DIR.resolve())]


def test_export_path_is_relative_to_config_file(tmp_path):
    cfg = tmp_path / "site" / "cfg.yaml"
    cfg.parent.mkdir()
    cfg.write_text("output:\n  export_path: build/docs.jsonl\n", encoding="utf-8")
    assert load_config(cfg).output.export_path == str((tmp_path / "site" / "build" / "docs.jsonl").resolve())


@pytest.mark.parametrize("roots", ["posts", "[1, 2]", "{a: b}"])
def test_content_roots_must_be_a_list_of_paths(tmp_path, roots):
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text(f"content:\n  content_roots: {roots}\n", encoding="utf-8")
    with pytest.raises(ValueError, match="content_roots"):
        load_config(cfg)
