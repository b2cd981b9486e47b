import numpy as np
import pytest
from numpy.testing import assert_allclose

from tapead import (
    ADVar, Adjoints, StaleReferenceError, Tape,
    chain, episode, exp, gradient, log,
)
from tapead.core.engine import backprop


def test_seed_is_one():
    with episode():
        x = ADVar(3.0)
        y = x * x + 1
        adj = chain(y)
        assert adj[y] == 1.0
        assert len(adj) == y.index + 1


def test_custom_seed():
    with episode():
        x = ADVar(3.0)
        y = x * 2
        adj = chain(y, seed=0.5)
        assert adj[y] == 0.5
        assert adj[x] == 1.0


def test_unreachable_is_zero():
    with episode():
        x1 = ADVar(1.5)
        x2 = ADVar(2.5)
        unused = exp(x2)
        y = x1 * 3
        adj = chain(y)
        assert adj[x2] == 0.0
        assert adj[unused] == 0.0
        assert adj[x1] == 3.0


def test_linearity():
    a, b = 2.5, -4.0
    with episode():
        x1 = ADVar(0.7)
        x2 = ADVar(-1.3)
        y = a * x1 + b * x2
        assert_allclose(gradient(y, [x1, x2]), [a, b])


def test_product_rule():
    with episode():
        x1 = ADVar(3.0)
        x2 = ADVar(-7.0)
        y = x1 * x2
        assert_allclose(gradient(y, [x1, x2]), [x2.value, x1.value])


def test_exp_rule():
    with episode():
        x = ADVar(0.8)
        y = exp(x)
        assert_allclose(chain(y)[x], np.exp(x.value))


def test_end_to_end():
    with episode():
        x1 = ADVar(10.3)
        x2 = ADVar(-1.1)
        y = x1 * exp(x2 * 2) + 7
        adj = chain(y)
        assert_allclose(y.value, 10.3 * np.exp(-2.2) + 7)
        assert_allclose(adj[x1], np.exp(-2.2))
        assert_allclose(adj[x2], 10.3 * 2 * np.exp(-2.2))
        assert_allclose(adj[x1], 0.110803, rtol=1e-5)


def test_shared_operand_accumulates():
    with episode():
        x = ADVar(3.0)
        y = x * x * x
        assert_allclose(chain(y)[x], 27.0)


def test_fan_out_accumulates():
    with episode():
        x = ADVar(0.5)
        u = exp(x)
        y = u * u + log(u)
        # y = exp(2x) + x
        assert_allclose(chain(y)[x], 2 * np.exp(1.0) + 1.0)


def test_literal_operands_get_no_slot():
    with episode() as tape:
        x = ADVar(2.0)
        y = 3.0 * x
        z = y - 1
        assert tape.records[0].operands == (None, x.index)
        assert tape.records[1].operands == (y.index, None)
        assert tape.size == 3
        assert chain(z)[x] == 3.0


def test_records_after_output_ignored():
    with episode():
        x = ADVar(2.0)
        y = x * 5
        later = y * 10
        adj = chain(y)
        assert adj[x] == 5.0
        assert adj[later] == 0.0
        assert len(adj) == y.index + 1


def test_integer_keys():
    with episode():
        x = ADVar(2.0)
        y = x * 4
        adj = chain(y)
        assert adj[x.index] == 4.0
        assert_allclose(adj.to_numpy(), [4.0, 1.0])


def forward_order_chain(y):
    # Deliberately wrong driver: replays the tape oldest record first.
    adjoint = np.zeros(y.index + 1)
    adjoint[y.index] = 1.0
    for record in y.tape.records:
        if record.index <= y.index:
            backprop(record, adjoint)
    return adjoint


def test_reverse_order_is_required():
    with episode():
        x = ADVar(0.3)
        y = exp(x * 2)
        expected = 2 * np.exp(0.6)
        assert_allclose(chain(y)[x], expected)
        wrong = forward_order_chain(y)
        assert not np.isclose(wrong[x.index], expected)


def test_reverse_order_is_required_end_to_end():
    with episode():
        x1 = ADVar(10.3)
        x2 = ADVar(-1.1)
        y = x1 * exp(x2 * 2) + 7
        good = chain(y).gradient([x1, x2])
        wrong = forward_order_chain(y)
        assert not np.allclose(wrong[[x1.index, x2.index]], good)


def run_episode():
    with episode():
        x1 = ADVar(10.3)
        x2 = ADVar(-1.1)
        y = x1 * exp(x2 * 2) + 7
        return (x1.index, x2.index, y.index), gradient(y, [x1, x2])


def test_episodes_are_idempotent():
    idx1, g1 = run_episode()
    idx2, g2 = run_episode()
    assert idx1 == idx2 == (0, 1, 5)
    assert_allclose(g1, g2)


def test_missing_reset_shifts_indices():
    tape = Tape()
    first = ADVar(1.0, tape=tape)
    y1 = first * 2
    # same computation again without a reset
    second = ADVar(1.0, tape=tape)
    y2 = second * 2
    assert second.index != first.index
    assert y2.index > y1.index
    tape.reset()
    third = ADVar(1.0, tape=tape)
    assert third.index == first.index


def test_chain_on_stale_output():
    tape = Tape()
    x = ADVar(1.0, tape=tape)
    y = x * 2
    tape.reset()
    with pytest.raises(StaleReferenceError):
        chain(y)


def test_read_after_reset():
    tape = Tape()
    x = ADVar(1.0, tape=tape)
    adj = chain(x * 2)
    assert adj[x] == 2.0
    tape.reset()
    with pytest.raises(StaleReferenceError):
        adj[x]
    with pytest.raises(StaleReferenceError):
        adj[0]
    with pytest.raises(StaleReferenceError):
        adj.to_numpy()


def test_read_after_episode_end():
    with episode():
        x = ADVar(1.0)
        adj = chain(x * 2)
    with pytest.raises(StaleReferenceError):
        adj[x]


def test_read_foreign_handle():
    with episode():
        x = ADVar(1.0)
        adj = chain(x * 2)
        with episode():
            other = ADVar(1.0)
            with pytest.raises(StaleReferenceError):
                adj[other]


def test_chain_requires_handle():
    with pytest.raises(TypeError):
        chain(1.0)


def test_adjoints_type():
    with episode():
        x = ADVar(1.0)
        assert isinstance(chain(x), Adjoints)
        assert chain(x)[x] == 1.0


def test_integer_keys_out_of_range():
    with episode():
        x = ADVar(2.0)
        y = x * 4
        adj = chain(y)
        with pytest.raises(IndexError):
            adj[-1]
        with pytest.raises(IndexError):
            adj[2]
