import logging

import jax
import jax.numpy as jnp
jax.config.update("jax_enable_x64", True)

import pytest

from rwmadapt.step_size import PolynomialStepSize


@pytest.mark.parametrize("eta", [0.51, 0.66, 0.8, 1.0])
def test_polynomial_step_size_non_negative_non_increasing(eta):
    step = PolynomialStepSize(eta)
    gammas = jnp.array([step.get(k) for k in range(1, 200)])

    assert jnp.all(gammas >= 0)
    assert jnp.all(jnp.diff(gammas) <= 0)


def test_polynomial_step_size_value():
    step = PolynomialStepSize(0.66, c=0.5)
    assert jnp.isclose(step.get(1), 0.5 * 2.0 ** (-0.66))
    assert jnp.isclose(step.get(9), 0.5 * 10.0 ** (-0.66))


def test_default_exponent():
    assert PolynomialStepSize().eta == 0.66


@pytest.mark.parametrize("eta,c", [(0.0, 1.0), (-0.5, 1.0), (0.66, 0.0)])
def test_invalid_parameters(eta, c):
    with pytest.raises(ValueError):
        PolynomialStepSize(eta, c)


def test_non_summable_exponent_warns(caplog):
    with caplog.at_level(logging.WARNING, logger="rwmadapt.step_size"):
        PolynomialStepSize(0.4)
    assert "outside (0.5, 1]" in caplog.text


def test_conforming_exponent_does_not_warn(caplog):
    with caplog.at_level(logging.WARNING, logger="rwmadapt.step_size"):
        PolynomialStepSize(0.66)
    assert caplog.text == ""
