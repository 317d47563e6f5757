"""Module-wide floating-point precision configuration.

Provides ``set_dtype`` and ``get_dtype`` to control the float dtype used
throughout georefjax.  The default is ``jnp.float64``: global positions are
millions of metres from the Earth's centre and single precision cannot hold
them to better than about half a metre.  Importing this module therefore
enables JAX's 64-bit mode (``jax_enable_x64``).

``jnp.float32`` is still accepted, mainly to reproduce the precision of a
single-precision rendering engine in tests and experiments.

Call ``set_dtype`` **before** any JIT compilation.  Under JIT, ``get_dtype()``
runs during tracing and its result is baked into the compiled program.
"""

from __future__ import annotations

import jax
import jax.numpy as jnp

_VALID_DTYPES = (jnp.float32, jnp.float64)

jax.config.update("jax_enable_x64", True)

_dtype = jnp.float64


def set_dtype(dtype) -> None:
    """Set the module-wide float dtype for georefjax.

    Must be called **before** any ``jax.jit`` compilation.  In eager mode
    the change takes effect immediately.

    If *dtype* is ``jnp.float64``, JAX's 64-bit mode is (re-)enabled via
    ``jax.config.update("jax_enable_x64", True)``.

    Args:
        dtype: One of ``jnp.float32`` or ``jnp.float64``.

    Raises:
        ValueError: If *dtype* is not a supported float type.
    """
    global _dtype
    if dtype not in _VALID_DTYPES:
        raise ValueError(
            f"Unsupported dtype {dtype}. Must be one of: "
            f"jnp.float32, jnp.float64"
        )
    if dtype == jnp.float64:
        jax.config.update("jax_enable_x64", True)
    _dtype = dtype


def get_dtype():
    """Return the current module-wide float dtype.

    Returns:
        The active float dtype (default ``jnp.float64``).
    """
    return _dtype


def get_transform_epsilon() -> float:
    """Return the dtype-adaptive tolerance for transform comparisons.

    The tolerance scales with the precision of the configured float dtype:

    - ``float64``:  1e-12
    - ``float32``:  1e-6

    Returns:
        float: Absolute tolerance for element-wise comparisons of unit
        vectors and rotation matrices.
    """
    if _dtype == jnp.float64:
        return 1e-12
    return 1e-6
