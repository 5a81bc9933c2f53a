import pytest

from contentlint.config import (
    CheckConfig,
    ConfigError,
    discover_config_file,
    load_config,
    parse_bool_input,
    parse_multiline_input,
    read_action_inputs,
)


def _load(tmp_path, overrides=None, environ=None, **kwargs):
    return load_config(overrides, root=tmp_path, environ=environ or {}, **kwargs)


def test_defaults():
    config = CheckConfig()
    assert config.check_utf8 and config.check_single_trailing_newline and config.check_trailing_whitespace
    assert config.jobs == 1
    assert config.patterns == ()


def test_patterns_are_required(tmp_path):
    with pytest.raises(ConfigError, match="No file patterns"):
        _load(tmp_path)
    assert _load(tmp_path, require_patterns=False).patterns == ()


def test_yaml_config_file(tmp_path):
    (tmp_path / ".contentlint.yaml").write_text(
        "files:\n  - 'src/**/*'\n  - '!src/gen/**/*'\n"
        "check-trailing-whitespace: false\njobs: 4\n",
        encoding="utf-8",
    )
    config = _load(tmp_path)
    assert config.patterns == ("src/**/*", "!src/gen/**/*")
    assert config.check_trailing_whitespace is False
    assert config.check_single_trailing_newline is True
    assert config.jobs == 4


def test_pyproject_section(tmp_path):
    (tmp_path / "pyproject.toml").write_text(
        "[project]\nname = 'x'\n\n[tool.contentlint]\nfiles = ['*.md']\ncheck_utf8 = false\n",
        encoding="utf-8",
    )
    config = _load(tmp_path)
    assert config.patterns == ("*.md",)
    assert config.check_utf8 is False


def test_pyproject_without_section_is_ignored(tmp_path):
    (tmp_path / "pyproject.toml").write_text("[project]\nname = 'x'\n", encoding="utf-8")
    assert discover_config_file(tmp_path) is None


def test_yaml_wins_over_pyproject(tmp_path):
    (tmp_path / "pyproject.toml").write_text("[tool.contentlint]\nfiles = ['a']\n", encoding="utf-8")
    (tmp_path / ".contentlint.yml").write_text("files: b\n", encoding="utf-8")
    assert _load(tmp_path).patterns == ("b",)


def test_explicit_config_path(tmp_path):
    path = tmp_path / "lint.yaml"
    path.write_text("files: '*.txt'\n", encoding="utf-8")
    assert _load(tmp_path, config_path=path).patterns == ("*.txt",)


def test_missing_explicit_config_path(tmp_path):
    with pytest.raises(ConfigError, match="Could not read config"):
        _load(tmp_path, config_path=tmp_path / "nope.yaml")


def test_layer_precedence(tmp_path):
    (tmp_path / ".contentlint.yaml").write_text(
        "files: ['from-file']\ncheck_utf8: false\njobs: 2\n", encoding="utf-8"
    )
    environ = {"INPUT_FILES": "from-env\n", "INPUT_JOBS": "3", "INPUT_CHECK_UTF8": "true"}
    config = _load(tmp_path, overrides={"jobs": 5, "patterns": None}, environ=environ)
    assert config.patterns == ("from-env",)
    assert config.check_utf8 is True
    assert config.jobs == 5


@pytest.mark.parametrize("text, message", [
    ("files: [\n", "Failed to parse"),
    ("- just\n- a list\n", "expected a mapping"),
    ("files: a\ncolour: blue\n", "unknown setting 'colour'"),
    ("files: a\ncheck_utf8: 'yes'\n", "must be true or false"),
    ("files: a\njobs: 0\n", "positive integer"),
    ("files: 3\n", "string or a list of strings"),
])
def test_invalid_config_files(tmp_path, text, message):
    (tmp_path / ".contentlint.yaml").write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError, match=message):
        _load(tmp_path)


def test_malformed_pyproject(tmp_path):
    (tmp_path / "pyproject.toml").write_text("[tool.contentlint\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="Failed to parse"):
        _load(tmp_path)


@pytest.mark.parametrize("name, data", [
    (".contentlint.yaml", b"files:\n  - 'caf\xe9/*'\n"),
    ("pyproject.toml", b"[tool.contentlint]\nfiles = [\"caf\xe9/*\"]\n"),
])
def test_config_file_that_is_not_utf8(tmp_path, name, data):
    (tmp_path / name).write_bytes(data)
    with pytest.raises(ConfigError, match="not valid UTF-8"):
        _load(tmp_path)


def test_empty_yaml_file_is_fine(tmp_path):
    (tmp_path / ".contentlint.yaml").write_text("", encoding="utf-8")
    assert _load(tmp_path, overrides={"patterns": ["x"]}).patterns == ("x",)


@pytest.mark.parametrize("value, expected", [
    ("true", True), ("True", True), ("TRUE", True),
    ("false", False), ("False", False), ("FALSE", False),
])
def test_parse_bool_input(value, expected):
    assert parse_bool_input("check_utf8", value) is expected


@pytest.mark.parametrize("value", ["yes", "1", "tRUE", "on"])
def test_parse_bool_input_rejects_other_spellings(value):
    with pytest.raises(ConfigError, match="check_utf8"):
        parse_bool_input("check_utf8", value)


def test_parse_multiline_input():
    assert parse_multiline_input("  src/**/*.py \n\n*.md\n   \n") == ["src/**/*.py", "*.md"]


def test_read_action_inputs():
    environ = {
        "INPUT_FILES": "a\nb\n",
        "INPUT_CHECK_UTF8": "false",
        "INPUT_CHECK_SINGLE_TRAILING_NEWLINE": "",
        "INPUT_CHECK_TRAILING_WHITESPACE": "TRUE",
    }
    assert read_action_inputs(environ) == {
        "patterns": ["a", "b"],
        "check_utf8": False,
        "check_trailing_whitespace": True,
    }


def test_read_action_inputs_bad_jobs():
    with pytest.raises(ConfigError, match="jobs"):
        read_action_inputs({"INPUT_JOBS": "many"})


def test_config_is_immutable():
    config = CheckConfig()
    with pytest.raises(AttributeError):
        config.jobs = 2
