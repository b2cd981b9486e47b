import pytest

from compare_aad_vs_bumping import model, parse_sizes


def test_parse_sizes():
    assert parse_sizes("2,10, 100") == [2, 10, 100]


@pytest.mark.parametrize("text", ["1", "2,1", "0"])
def test_parse_sizes_rejects_small(text):
    with pytest.raises(ValueError):
        parse_sizes(text)


def test_model_on_numbers():
    assert model([0.0, 0.0]) == 7.0
