import pytest

from pokepatch.config import DEFAULT_EXPANSION, MIB, ExpansionConfig, load_config


def test_defaults():
    assert DEFAULT_EXPANSION.base_size == 16 * MIB
    assert DEFAULT_EXPANSION.expanded_size == 32 * MIB
    assert DEFAULT_EXPANSION.fill == 0xFF
    assert DEFAULT_EXPANSION.fill_byte == b"\xff"


def test_load(tmp_path):
    config = tmp_path / "pokepatch.yaml"
    config.write_text("base_size: 8388608\nexpanded_size: 16777216\nfill: 0\n", encoding="utf-8")
    assert load_config(config) == ExpansionConfig(8 * MIB, 16 * MIB, 0)


def test_load_partial(tmp_path):
    config = tmp_path / "pokepatch.yaml"
    config.write_text("fill: 0x00\n", encoding="utf-8")
    assert load_config(config) == ExpansionConfig(fill=0)


def test_load_empty(tmp_path):
    config = tmp_path / "pokepatch.yaml"
    config.write_text("", encoding="utf-8")
    assert load_config(config) == DEFAULT_EXPANSION


@pytest.mark.parametrize(
    "contents",
    [
        "- 1\n- 2\n",
        "unknown: 1\n",
        "fill: 256\n",
        "fill: true\n",
        "base_size: abc\n",
        "base_size: 100\nexpanded_size: 50\n",
        "expanded_size: 8589934592\n",
        "1: 2\n",
        "fill: [\n",
    ],
)
def test_load_invalid(tmp_path, contents):
    config = tmp_path / "pokepatch.yaml"
    config.write_text(contents, encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(config)
