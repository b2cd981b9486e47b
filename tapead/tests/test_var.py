import numpy as np
import pytest

from tapead import ADVar, Tape, as_variable, episode, value


def test_literal_allocates_slot_without_record():
    with episode() as tape:
        x = ADVar(2)
        y = ADVar(np.float64(3.5), name="y")
        assert (x.index, y.index) == (0, 1)
        assert x.value == 2.0 and isinstance(x.value, float)
        assert y.name == "y"
        assert len(tape) == 0


def test_explicit_tape():
    tape = Tape()
    x = ADVar(1.0, tape=tape)
    assert x.tape is tape
    assert x.generation == 0


@pytest.mark.parametrize("bad", [True, "1.0", None, [1.0], 1 + 2j])
def test_rejects_non_real(bad):
    with episode():
        with pytest.raises(TypeError):
            ADVar(bad)


def test_rejects_handle():
    with episode():
        x = ADVar(1.0)
        with pytest.raises(TypeError):
            ADVar(x)


def test_immutable():
    with episode():
        x = ADVar(1.0)
        with pytest.raises(AttributeError):
            x.value = 2.0
        with pytest.raises(AttributeError):
            x._index = 5
        with pytest.raises(AttributeError):
            del x._value
        assert x.value == 1.0 and x.index == 0


def test_repr_marks_stale():
    tape = Tape()
    x = ADVar(1.0, tape=tape, name="x")
    assert "stale" not in repr(x)
    tape.reset()
    assert "stale" in repr(x)


def test_comparisons_use_values():
    with episode():
        x = ADVar(1.0)
        y = ADVar(2.0)
        assert x < y and y > x
        assert x <= 1.0 and x >= 1
        assert not (x > 1.5)


def test_hashable_identity():
    with episode():
        x = ADVar(1.0)
        y = ADVar(1.0)
        assert x != y
        assert len({x: 1, y: 2}) == 2


def test_operators():
    with episode():
        x = ADVar(3.0)
        assert (x + 1).value == 4.0
        assert (1 + x).value == 4.0
        assert (x - 1).value == 2.0
        assert (1 - x).value == -2.0
        assert (x * 2).value == 6.0
        assert (x / 2).value == 1.5
        assert (6 / x).value == 2.0
        assert (-x).value == -3.0
        assert (+x) is x
        assert abs(-x).value == 3.0
        assert (x ** 2).value == 9.0
        assert (2 ** x).value == 8.0


def test_numpy_scalar_defers_to_handle():
    with episode():
        x = ADVar(3.0)
        y = np.float64(2.0) * x
        assert isinstance(y, ADVar)
        assert y.value == 6.0


def test_as_variable_and_value():
    with episode():
        x = as_variable(2.0, name="x")
        assert isinstance(x, ADVar)
        assert as_variable(x) is x
        assert value(x) == 2.0
        assert value(5) == 5
