"""Coefficient tables for the periodic series.

Stored as Python tuples so that importing this module never creates JAX
arrays; the evaluators convert them at call time with the active dtype.

Tables:

- ``NUTATION_IAU1980``: IAU 1980 nutation, 106 terms.  Columns are the
  multipliers of (l, l', F, D, Omega), then the longitude sine coefficient
  and its rate, then the obliquity cosine coefficient and its rate.
  Coefficients are in 0.1 mas, rates in 0.1 mas per Julian millennium.
- ``S06_*``: CIO locator series (IAU 2006), terms of order t^0 .. t^4.
  Multipliers of (l, l', F, D, Omega, LVe, LE, pA); (sin, cos)
  coefficients in arcseconds.
"""

# fmt: off
NUTATION_IAU1980 = (
    (0, 0, 0, 0, 1, -171996.0, -1742.0, 92025.0, 89.0),
    (0, 0, 0, 0, 2, 2062.0, 2.0, -895.0, 5.0),
    (-2, 0, 2, 0, 1, 46.0, 0.0, -24.0, 0.0),
    (2, 0, -2, 0, 0, 11.0, 0.0, 0.0, 0.0),
    (-2, 0, 2, 0, 2, -3.0, 0.0, 1.0, 0.0),
    (1, -1, 0, -1, 0, -3.0, 0.0, 0.0, 0.0),
    (0, -2, 2, -2, 1, -2.0, 0.0, 1.0, 0.0),
    (2, 0, -2, 0, 1, 1.0, 0.0, 0.0, 0.0),
    (0, 0, 2, -2, 2, -13187.0, -16.0, 5736.0, -31.0),
    (0, 1, 0, 0, 0, 1426.0, -34.0, 54.0, -1.0),
    (0, 1, 2, -2, 2, -517.0, 12.0, 224.0, -6.0),
    (0, -1, 2, -2, 2, 217.0, -5.0, -95.0, 3.0),
    (0, 0, 2, -2, 1, 129.0, 1.0, -70.0, 0.0),
    (2, 0, 0, -2, 0, 48.0, 0.0, 1.0, 0.0),
    (0, 0, 2, -2, 0, -22.0, 0.0, 0.0, 0.0),
    (0, 2, 0, 0, 0, 17.0, -1.0, 0.0, 0.0),
    (0, 1, 0, 0, 1, -15.0, 0.0, 9.0, 0.0),
    (0, 2, 2, -2, 2, -16.0, 1.0, 7.0, 0.0),
    (0, -1, 0, 0, 1, -12.0, 0.0, 6.0, 0.0),
    (-2, 0, 0, 2, 1, -6.0, 0.0, 3.0, 0.0),
    (0, -1, 2, -2, 1, -5.0, 0.0, 3.0, 0.0),
    (2, 0, 0, -2, 1, 4.0, 0.0, -2.0, 0.0),
    (0, 1, 2, -2, 1, 4.0, 0.0, -2.0, 0.0),
    (1, 0, 0, -1, 0, -4.0, 0.0, 0.0, 0.0),
    (2, 1, 0, -2, 0, 1.0, 0.0, 0.0, 0.0),
    (0, 0, -2, 2, 1, 1.0, 0.0, 0.0, 0.0),
    (0, 1, -2, 2, 0, -1.0, 0.0, 0.0, 0.0),
    (0, 1, 0, 0, 2, 1.0, 0.0, 0.0, 0.0),
    (-1, 0, 0, 1, 1, 1.0, 0.0, 0.0, 0.0),
    (0, 1, 2, -2, 0, -1.0, 0.0, 0.0, 0.0),
    (0, 0, 2, 0, 2, -2274.0, -2.0, 977.0, -5.0),
    (1, 0, 0, 0, 0, 712.0, 1.0, -7.0, 0.0),
    (0, 0, 2, 0, 1, -386.0, -4.0, 200.0, 0.0),
    (1, 0, 2, 0, 2, -301.0, 0.0, 129.0, -1.0),
    (1, 0, 0, -2, 0, -158.0, 0.0, -1.0, 0.0),
    (-1, 0, 2, 0, 2, 123.0, 0.0, -53.0, 0.0),
    (0, 0, 0, 2, 0, 63.0, 0.0, -2.0, 0.0),
    (1, 0, 0, 0, 1, 63.0, 1.0, -33.0, 0.0),
    (-1, 0, 0, 0, 1, -58.0, -1.0, 32.0, 0.0),
    (-1, 0, 2, 2, 2, -59.0, 0.0, 26.0, 0.0),
    (1, 0, 2, 0, 1, -51.0, 0.0, 27.0, 0.0),
    (0, 0, 2, 2, 2, -38.0, 0.0, 16.0, 0.0),
    (2, 0, 0, 0, 0, 29.0, 0.0, -1.0, 0.0),
    (1, 0, 2, -2, 2, 29.0, 0.0, -12.0, 0.0),
    (2, 0, 2, 0, 2, -31.0, 0.0, 13.0, 0.0),
    (0, 0, 2, 0, 0, 26.0, 0.0, -1.0, 0.0),
    (-1, 0, 2, 0, 1, 21.0, 0.0, -10.0, 0.0),
    (-1, 0, 0, 2, 1, 16.0, 0.0, -8.0, 0.0),
    (1, 0, 0, -2, 1, -13.0, 0.0, 7.0, 0.0),
    (-1, 0, 2, 2, 1, -10.0, 0.0, 5.0, 0.0),
    (1, 1, 0, -2, 0, -7.0, 0.0, 0.0, 0.0),
    (0, 1, 2, 0, 2, 7.0, 0.0, -3.0, 0.0),
    (0, -1, 2, 0, 2, -7.0, 0.0, 3.0, 0.0),
    (1, 0, 2, 2, 2, -8.0, 0.0, 3.0, 0.0),
    (1, 0, 0, 2, 0, 6.0, 0.0, 0.0, 0.0),
    (2, 0, 2, -2, 2, 6.0, 0.0, -3.0, 0.0),
    (0, 0, 0, 2, 1, -6.0, 0.0, 3.0, 0.0),
    (0, 0, 2, 2, 1, -7.0, 0.0, 3.0, 0.0),
    (1, 0, 2, -2, 1, 6.0, 0.0, -3.0, 0.0),
    (0, 0, 0, -2, 1, -5.0, 0.0, 3.0, 0.0),
    (1, -1, 0, 0, 0, 5.0, 0.0, 0.0, 0.0),
    (2, 0, 2, 0, 1, -5.0, 0.0, 3.0, 0.0),
    (0, 1, 0, -2, 0, -4.0, 0.0, 0.0, 0.0),
    (1, 0, -2, 0, 0, 4.0, 0.0, 0.0, 0.0),
    (0, 0, 0, 1, 0, -4.0, 0.0, 0.0, 0.0),
    (1, 1, 0, 0, 0, -3.0, 0.0, 0.0, 0.0),
    (1, 0, 2, 0, 0, 3.0, 0.0, 0.0, 0.0),
    (1, -1, 2, 0, 2, -3.0, 0.0, 1.0, 0.0),
    (-1, -1, 2, 2, 2, -3.0, 0.0, 1.0, 0.0),
    (-2, 0, 0, 0, 1, -2.0, 0.0, 1.0, 0.0),
    (3, 0, 2, 0, 2, -3.0, 0.0, 1.0, 0.0),
    (0, -1, 2, 2, 2, -3.0, 0.0, 1.0, 0.0),
    (1, 1, 2, 0, 2, 2.0, 0.0, -1.0, 0.0),
    (-1, 0, 2, -2, 1, -2.0, 0.0, 1.0, 0.0),
    (2, 0, 0, 0, 1, 2.0, 0.0, -1.0, 0.0),
    (1, 0, 0, 0, 2, -2.0, 0.0, 1.0, 0.0),
    (3, 0, 0, 0, 0, 2.0, 0.0, 0.0, 0.0),
    (0, 0, 2, 1, 2, 2.0, 0.0, -1.0, 0.0),
    (-1, 0, 0, 0, 2, 1.0, 0.0, -1.0, 0.0),
    (1, 0, 0, -4, 0, -1.0, 0.0, 0.0, 0.0),
    (-2, 0, 2, 2, 2, 1.0, 0.0, -1.0, 0.0),
    (-1, 0, 2, 4, 2, -2.0, 0.0, 1.0, 0.0),
    (2, 0, 0, -4, 0, -1.0, 0.0, 0.0, 0.0),
    (1, 1, 2, -2, 2, 1.0, 0.0, -1.0, 0.0),
    (1, 0, 2, 2, 1, -1.0, 0.0, 1.0, 0.0),
    (-2, 0, 2, 4, 2, -1.0, 0.0, 1.0, 0.0),
    (-1, 0, 4, 0, 2, 1.0, 0.0, 0.0, 0.0),
    (1, -1, 0, -2, 0, 1.0, 0.0, 0.0, 0.0),
    (2, 0, 2, -2, 1, 1.0, 0.0, -1.0, 0.0),
    (2, 0, 2, 2, 2, -1.0, 0.0, 0.0, 0.0),
    (1, 0, 0, 2, 1, -1.0, 0.0, 0.0, 0.0),
    (0, 0, 4, -2, 2, 1.0, 0.0, 0.0, 0.0),
    (3, 0, 2, -2, 2, 1.0, 0.0, 0.0, 0.0),
    (1, 0, 2, -2, 0, -1.0, 0.0, 0.0, 0.0),
    (0, 1, 2, 0, 1, 1.0, 0.0, 0.0, 0.0),
    (-1, -1, 0, 2, 1, 1.0, 0.0, 0.0, 0.0),
    (0, 0, -2, 0, 1, -1.0, 0.0, 0.0, 0.0),
    (0, 0, 2, -1, 2, -1.0, 0.0, 0.0, 0.0),
    (0, 1, 0, 2, 0, -1.0, 0.0, 0.0, 0.0),
    (1, 0, -2, -2, 0, -1.0, 0.0, 0.0, 0.0),
    (0, -1, 2, 0, 1, -1.0, 0.0, 0.0, 0.0),
    (1, 1, 0, -2, 1, -1.0, 0.0, 0.0, 0.0),
    (1, 0, -2, 2, 0, -1.0, 0.0, 0.0, 0.0),
    (2, 0, 0, 2, 0, 1.0, 0.0, 0.0, 0.0),
    (0, 0, 2, 4, 2, -1.0, 0.0, 0.0, 0.0),
    (0, 1, 0, 1, 0, 1.0, 0.0, 0.0, 0.0),
)

# Polynomial coefficients for s + XY/2 (arcseconds -> radians at evaluation)
S06_POLYNOMIAL = (94.00e-6, 3808.65e-6, -122.68e-6, -72574.11e-6, 27.98e-6, 15.62e-6)

# Terms of order t^0 (33 terms)
S06_S0_MULTIPLIERS = (
    (0,0,0,0,1,0,0,0), (0,0,0,0,2,0,0,0), (0,0,2,-2,3,0,0,0),
    (0,0,2,-2,1,0,0,0), (0,0,2,-2,2,0,0,0), (0,0,2,0,3,0,0,0),
    (0,0,2,0,1,0,0,0), (0,0,0,0,3,0,0,0), (0,1,0,0,1,0,0,0),
    (0,1,0,0,-1,0,0,0), (1,0,0,0,-1,0,0,0), (1,0,0,0,1,0,0,0),
    (0,1,2,-2,3,0,0,0), (0,1,2,-2,1,0,0,0), (0,0,4,-4,4,0,0,0),
    (0,0,1,-1,1,-8,12,0), (0,0,2,0,0,0,0,0), (0,0,2,0,2,0,0,0),
    (1,0,2,0,3,0,0,0), (1,0,2,0,1,0,0,0), (0,0,2,-2,0,0,0,0),
    (0,1,-2,2,-3,0,0,0), (0,1,-2,2,-1,0,0,0), (0,0,0,0,0,8,-13,-1),
    (0,0,0,2,0,0,0,0), (2,0,-2,0,-1,0,0,0), (0,1,2,-2,2,0,0,0),
    (1,0,0,-2,1,0,0,0), (1,0,0,-2,-1,0,0,0), (0,0,4,-2,4,0,0,0),
    (0,0,2,-2,4,0,0,0), (1,0,-2,0,-3,0,0,0), (1,0,-2,0,-1,0,0,0),
)
S06_S0_AMPLITUDES = (
    (-2640.73e-6, 0.39e-6), (-63.53e-6, 0.02e-6), (-11.75e-6, -0.01e-6),
    (-11.21e-6, -0.01e-6), (4.57e-6, 0.00e-6), (-2.02e-6, 0.00e-6),
    (-1.98e-6, 0.00e-6), (1.72e-6, 0.00e-6), (1.41e-6, 0.01e-6),
    (1.26e-6, 0.01e-6), (0.63e-6, 0.00e-6), (0.63e-6, 0.00e-6),
    (-0.46e-6, 0.00e-6), (-0.45e-6, 0.00e-6), (-0.36e-6, 0.00e-6),
    (0.24e-6, 0.12e-6), (-0.32e-6, 0.00e-6), (-0.28e-6, 0.00e-6),
    (-0.27e-6, 0.00e-6), (-0.26e-6, 0.00e-6), (0.21e-6, 0.00e-6),
    (-0.19e-6, 0.00e-6), (-0.18e-6, 0.00e-6), (0.10e-6, -0.05e-6),
    (-0.15e-6, 0.00e-6), (0.14e-6, 0.00e-6), (0.14e-6, 0.00e-6),
    (-0.14e-6, 0.00e-6), (-0.14e-6, 0.00e-6), (-0.13e-6, 0.00e-6),
    (0.11e-6, 0.00e-6), (-0.11e-6, 0.00e-6), (-0.11e-6, 0.00e-6),
)

# Terms of order t^1 (3 terms)
S06_S1_MULTIPLIERS = (
    (0,0,0,0,2,0,0,0), (0,0,0,0,1,0,0,0), (0,0,2,-2,3,0,0,0),
)
S06_S1_AMPLITUDES = (
    (-0.07e-6, 3.57e-6), (1.73e-6, -0.03e-6), (0.00e-6, 0.48e-6),
)

# Terms of order t^2 (25 terms)
S06_S2_MULTIPLIERS = (
    (0,0,0,0,1,0,0,0), (0,0,2,-2,2,0,0,0), (0,0,2,0,2,0,0,0),
    (0,0,0,0,2,0,0,0), (0,1,0,0,0,0,0,0), (1,0,0,0,0,0,0,0),
    (0,1,2,-2,2,0,0,0), (0,0,2,0,1,0,0,0), (1,0,2,0,2,0,0,0),
    (0,1,-2,2,-2,0,0,0), (1,0,0,-2,0,0,0,0), (0,0,2,-2,1,0,0,0),
    (1,0,-2,0,-2,0,0,0), (0,0,0,2,0,0,0,0), (1,0,0,0,1,0,0,0),
    (1,0,-2,-2,-2,0,0,0), (1,0,0,0,-1,0,0,0), (1,0,2,0,1,0,0,0),
    (2,0,0,-2,0,0,0,0), (2,0,-2,0,-1,0,0,0), (0,0,2,2,2,0,0,0),
    (2,0,2,0,2,0,0,0), (2,0,0,0,0,0,0,0), (1,0,2,-2,2,0,0,0),
    (0,0,2,0,0,0,0,0),
)
S06_S2_AMPLITUDES = (
    (743.52e-6, -0.17e-6), (56.91e-6, 0.06e-6), (9.84e-6, -0.01e-6),
    (-8.85e-6, 0.01e-6), (-6.38e-6, -0.05e-6), (-3.07e-6, 0.00e-6),
    (2.23e-6, 0.00e-6), (1.67e-6, 0.00e-6), (1.30e-6, 0.00e-6),
    (0.93e-6, 0.00e-6), (0.68e-6, 0.00e-6), (-0.55e-6, 0.00e-6),
    (0.53e-6, 0.00e-6), (-0.27e-6, 0.00e-6), (-0.27e-6, 0.00e-6),
    (-0.26e-6, 0.00e-6), (-0.25e-6, 0.00e-6), (0.22e-6, 0.00e-6),
    (-0.21e-6, 0.00e-6), (0.20e-6, 0.00e-6), (0.17e-6, 0.00e-6),
    (0.13e-6, 0.00e-6), (-0.13e-6, 0.00e-6), (-0.12e-6, 0.00e-6),
    (-0.11e-6, 0.00e-6),
)

# Terms of order t^3 (4 terms)
S06_S3_MULTIPLIERS = (
    (0,0,0,0,1,0,0,0), (0,0,2,-2,2,0,0,0),
    (0,0,2,0,2,0,0,0), (0,0,0,0,2,0,0,0),
)
S06_S3_AMPLITUDES = (
    (0.30e-6, -23.42e-6), (-0.03e-6, -1.46e-6),
    (-0.01e-6, -0.25e-6), (0.00e-6, 0.23e-6),
)

# Terms of order t^4 (1 term)
S06_S4_MULTIPLIERS = ((0,0,0,0,1,0,0,0),)
S06_S4_AMPLITUDES = ((-0.26e-6, -0.01e-6),)
# fmt: on
