"""
Standard Atmosphere Model
=========================
Air density as a function of altitude, from the three-layer curve fit
published by NASA Glenn (Earth Atmosphere Model):

  - Troposphere (below 11 km): linear temperature lapse
  - Lower stratosphere (11-25 km): isothermal, exponential pressure decay
  - Upper stratosphere (25 km and up): temperature rises again

Units: altitude in meters, temperature in °C, pressure in kPa, density in
kg/m³. Above 25 km the upper-stratosphere fit is used without bound.

Reference: https://www.grc.nasa.gov/www/k-12/airplane/atmosmet.html
"""

import numpy as np


# ── Layer boundaries ──────────────────────────────────────────────────────
TROPOPAUSE_ALT        = 11000.0    # m
UPPER_STRATOSPHERE_ALT = 25000.0   # m

# ── Curve-fit constants ───────────────────────────────────────────────────
CELSIUS_TO_KELVIN     = 273.1
GAS_CONSTANT_KPA      = 0.2869     # kPa·m³/(kg·K), specific gas constant for air


def temperature(altitude: float) -> float:
    """Air temperature (°C) at the given altitude (m)."""
    if altitude < TROPOPAUSE_ALT:
        return 15.04 - 0.00649 * altitude
    elif altitude < UPPER_STRATOSPHERE_ALT:
        return -56.46
    else:
        return -131.21 + 0.00299 * altitude


def pressure(altitude: float) -> float:
    """Air pressure (kPa) at the given altitude (m)."""
    T = temperature(altitude)
    if altitude < TROPOPAUSE_ALT:
        return 101.29 * ((T + CELSIUS_TO_KELVIN) / 288.08) ** 5.256
    elif altitude < UPPER_STRATOSPHERE_ALT:
        return 22.65 * np.exp(1.73 - 0.000157 * altitude)
    else:
        return 2.488 * ((T + CELSIUS_TO_KELVIN) / 216.6) ** -11.388


def density(altitude: float, air_resistance_on: bool = True) -> float:
    """
    Air density (kg/m³): ρ = P / (R × T).

    With air resistance turned off the density is exactly zero, whatever
    the altitude.
    """
    if not air_resistance_on:
        return 0.0
    T = temperature(altitude)
    P = pressure(altitude)
    return float(P / (GAS_CONSTANT_KPA * (T + CELSIUS_TO_KELVIN)))


# ── Vectorized version for plotting ───────────────────────────────────────
def atmosphere_profile(alt_array: np.ndarray) -> dict:
    """
    Compute the atmospheric profile for an array of altitudes.
    Returns dict with keys: 'altitude', 'temperature', 'pressure', 'density'.
    """
    alt_array = np.asarray(alt_array, dtype=float)
    T = np.array([temperature(h) for h in alt_array])
    P = np.array([pressure(h) for h in alt_array])
    rho = np.array([density(h) for h in alt_array])
    return {
        'altitude': alt_array,
        'temperature': T,
        'pressure': P,
        'density': rho,
    }


if __name__ == "__main__":
    print("Atmosphere Model")
    print("=" * 46)
    print(f"{'Alt (m)':>10} {'T (°C)':>10} {'P (kPa)':>10} {'ρ (kg/m³)':>12}")
    print("-" * 46)
    for h in [0, 1000, 5000, 10000, 11000, 20000, 25000, 30000]:
        print(f"{h:>10.0f} {temperature(h):>10.2f} {pressure(h):>10.3f} "
              f"{density(h):>12.5f}")
