import pytest

from gridfall.config import GameConfig


def test_defaults_match_classic_board():
    config = GameConfig()
    assert (config.rows, config.cols) == (20, 10)
    assert config.tick_ms == 500
    assert config.board_size_px == (300, 600)
    assert config.validate() is config


def test_from_file_reads_game_section(tmp_path):
    path = tmp_path / "gridfall.ini"
    path.write_text(
        "[game]\n"
        "rows = 16\n"
        "cell_size = 24\n"
        "tick_ms = 250\n"
        "seed = 9\n"
        "renderer = Curses\n"
    )
    config = GameConfig.from_file(path)
    assert config.rows == 16
    assert config.cols == 10
    assert config.cell_size == 24
    assert config.tick_ms == 250
    assert config.seed == 9
    assert config.renderer == "curses"


def test_missing_file_or_section_uses_defaults(tmp_path):
    assert GameConfig.from_file(tmp_path / "missing.ini") == GameConfig()
    path = tmp_path / "other.ini"
    path.write_text("[display]\nrows = 3\n")
    assert GameConfig.from_file(path) == GameConfig()


@pytest.mark.parametrize(
    "overrides",
    [
        {"rows": 0},
        {"tick_ms": -5},
        {"cell_size": 0},
        {"cols": 4},
        {"line_score": -1},
        {"renderer": "opengl"},
    ],
)
def test_validate_rejects_bad_values(overrides):
    with pytest.raises(ValueError):
        GameConfig(**overrides).validate()


def test_narrowest_playable_board():
    assert GameConfig(cols=5).validate().cols == 5


@pytest.mark.parametrize(
    "text",
    [
        "rows = 3\n",
        "[game]\nrows = 3\nrows = 4\n",
    ],
)
def test_malformed_file_raises_value_error(tmp_path, text):
    path = tmp_path / "broken.ini"
    path.write_text(text)
    with pytest.raises(ValueError, match="Cannot parse config file"):
        GameConfig.from_file(path)


def test_non_numeric_value_raises_value_error(tmp_path):
    path = tmp_path / "gridfall.ini"
    path.write_text("[game]\nrows = tall\n")
    with pytest.raises(ValueError):
        GameConfig.from_file(path)


def test_config_class_is_documented():
    assert GameConfig.__doc__.startswith("Board geometry")
