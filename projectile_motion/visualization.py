"""
Visualization
=============
Offline plots for the runner script:
  1. Recorded trajectories (height vs range) with apex, landing and
     minor/major dot markers, and the tracer reading if any
  2. Atmospheric profile (temperature, pressure, density)
"""

import numpy as np
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
from typing import Optional, Sequence
import os

from .atmosphere import atmosphere_profile
from .config import DEFAULT_CONFIG
from .tracer import Tracer
from .trajectory import Trajectory


# ── Style Configuration ───────────────────────────────────────────────────
STYLE = {
    'bg_color': '#0a0a0a',
    'text_color': '#e0e0e0',
    'grid_color': '#333333',
    'accent_colors': ['#00d4ff', '#ff6b35', '#00e676', '#ffeb3b',
                      '#e040fb', '#ff5252'],
}


def _apply_dark_style(fig, axes):
    """Apply consistent dark theme to figure and axes."""
    fig.patch.set_facecolor(STYLE['bg_color'])
    if not isinstance(axes, np.ndarray):
        axes = [axes]
    else:
        axes = axes.flatten()

    for ax in axes:
        ax.set_facecolor(STYLE['bg_color'])
        ax.tick_params(colors=STYLE['text_color'])
        ax.xaxis.label.set_color(STYLE['text_color'])
        ax.yaxis.label.set_color(STYLE['text_color'])
        ax.title.set_color(STYLE['text_color'])
        ax.grid(True, color=STYLE['grid_color'], alpha=0.4, linewidth=0.5)
        for spine in ax.spines.values():
            spine.set_color(STYLE['grid_color'])


def ensure_output_dir(path: str = 'outputs'):
    os.makedirs(path, exist_ok=True)
    return path


# ══════════════════════════════════════════════════════════════════════════
#  1. Trajectories
# ══════════════════════════════════════════════════════════════════════════

def plot_trajectories(trajectories: Sequence[Trajectory],
                      tracer: Optional[Tracer] = None,
                      save_path: str = None, show: bool = False) -> plt.Figure:
    """Height vs range for every recorded trajectory."""
    config = tracer.config if tracer is not None else DEFAULT_CONFIG
    fig, ax = plt.subplots(figsize=(12, 6))
    _apply_dark_style(fig, ax)

    colors = STYLE['accent_colors']
    for i, traj in enumerate(trajectories):
        if not traj.samples:
            continue
        color = colors[i % len(colors)]
        ax.plot(traj.xs, traj.ys, color=color, linewidth=1.5,
                label=f'#{i + 1}  v₀={traj.conditions.speed:.0f} m/s, '
                      f'θ={traj.conditions.angle_deg:.0f}°')

        ms = np.array([s.time_ms for s in traj.samples])
        minor = ms % config.time_per_minor_dot == 0
        major = ms % config.time_per_major_dot == 0
        ax.plot(traj.xs[minor], traj.ys[minor], '.', color=color, markersize=4)
        ax.plot(traj.xs[major], traj.ys[major], 'o', color=color, markersize=7)

        if traj.apex_point is not None:
            ax.plot(traj.apex_point.x, traj.apex_point.y, '^',
                    color='#ffeb3b', markersize=10, zorder=5)
        if traj.reached_ground:
            ax.plot(traj.landing_x, 0.0, 'x', color='#ff5252',
                    markersize=12, markeredgewidth=3, zorder=5)

    if tracer is not None and tracer.data_point is not None:
        point = tracer.data_point
        ax.plot(point.x, point.y, 'o', markersize=18, markerfacecolor='none',
                markeredgecolor='#e040fb', markeredgewidth=2, zorder=6)
        ax.annotate(f't={point.time:.2f} s\nx={point.x:.2f} m\ny={point.y:.2f} m',
                    (point.x, point.y), textcoords='offset points', xytext=(12, 12),
                    color=STYLE['text_color'], fontsize=9)

    ax.set_xlabel('Range (m)', fontsize=12)
    ax.set_ylabel('Height (m)', fontsize=12)
    ax.set_title('Projectile Trajectories', fontsize=13, fontweight='bold')
    if trajectories:
        ax.legend(loc='upper right', fontsize=9,
                  facecolor='#1a1a1a', edgecolor='#444', labelcolor=STYLE['text_color'])
    ax.set_ylim(bottom=0)

    plt.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches='tight',
                    facecolor=STYLE['bg_color'])
    if show:
        plt.show()
    return fig


# ══════════════════════════════════════════════════════════════════════════
#  2. Atmospheric Profile
# ══════════════════════════════════════════════════════════════════════════

def plot_atmosphere(save_path: str = None) -> plt.Figure:
    """Atmospheric profile from 0 to 40 km."""
    altitudes = np.linspace(0, 40000, 500)
    profile = atmosphere_profile(altitudes)

    fig, axes = plt.subplots(1, 3, figsize=(15, 7), sharey=True)
    _apply_dark_style(fig, axes)

    alt_km = altitudes / 1000

    params = [
        ('Temperature (°C)', profile['temperature'], '#ff6b35'),
        ('Pressure (kPa)', profile['pressure'], '#00d4ff'),
        ('Density (kg/m³)', profile['density'], '#00e676'),
    ]

    for ax, (title, data, color) in zip(axes, params):
        ax.plot(data, alt_km, color=color, linewidth=2)
        ax.set_xlabel(title, fontsize=10)
        ax.fill_betweenx(alt_km, 0, data, alpha=0.1, color=color)

    axes[0].set_ylabel('Altitude (km)', fontsize=12)
    fig.suptitle('Atmosphere Model', fontsize=14, fontweight='bold',
                 color=STYLE['text_color'])
    plt.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches='tight',
                    facecolor=STYLE['bg_color'])
    return fig
