"""
FlightLog class definition

Per-frame record of the rocket's state for analysis and plotting.
"""

import numpy as np
import pandas as pd
from typing import List, Optional, Tuple, TYPE_CHECKING
import plotly.graph_objects as go
from .config import config
if TYPE_CHECKING:
    from .world import World

_NUMERIC_COLUMNS = ('time', 'x', 'y', 'vx', 'vy', 'ax', 'ay', 'angle', 'fuel')


class FlightLog:
    """
    A growing sequence of rocket samples, one per physics step.

    Attributes:
        samples: list of (time, x, y, vx, vy, ax, ay, angle, fuel) tuples
        states: game state name recorded with each sample
    """
    # ========== CONSTRUCTION ==========
    def __init__(self):
        self._samples: List[Tuple[float, ...]] = []
        self._states: List[str] = []

    # ========== RECORDING ==========
    def record(self, time: float, rocket, state: str = '') -> None:
        """Append the rocket's current state at ``time``."""
        self._samples.append((
            float(time),
            rocket.position.x, rocket.position.y,
            rocket.velocity.x, rocket.velocity.y,
            rocket.acceleration.x, rocket.acceleration.y,
            rocket.angle, rocket.fuel,
        ))
        self._states.append(state)

    def clear(self) -> None:
        self._samples.clear()
        self._states.clear()

    # ========== PROPERTY ACCESS ==========
    @property
    def samples(self) -> List[Tuple[float, ...]]:
        return list(self._samples)

    @property
    def states(self) -> List[str]:
        return list(self._states)

    @property
    def t0(self) -> Optional[float]:
        return self._samples[0][0] if self._samples else None

    @property
    def tf(self) -> Optional[float]:
        return self._samples[-1][0] if self._samples else None

    @property
    def duration(self) -> float:
        """Time covered by the log (0 when fewer than two samples)."""
        if len(self._samples) < 2:
            return 0.0
        return self.tf - self.t0

    # ========== EXPORT ==========
    def to_numpy(self) -> np.ndarray:
        """
        Numeric samples as an array.

        Returns:
            Array of shape (n_samples, 9) with columns
            time, x, y, vx, vy, ax, ay, angle, fuel
        """
        if not self._samples:
            return np.empty((0, len(_NUMERIC_COLUMNS)))
        return np.array(self._samples, dtype=float)

    def to_dataframe(self) -> pd.DataFrame:
        """
        Export the log to a pandas DataFrame.

        Returns:
            DataFrame with columns time, x, y, vx, vy, ax, ay, angle, fuel, state
        """
        states = self.to_numpy()

        # Build data dictionary using array slicing
        data = {name: states[:, k] for k, name in enumerate(_NUMERIC_COLUMNS)}
        data['state'] = list(self._states)

        return pd.DataFrame(data)

    def positions(self, n_points: Optional[int] = None) -> np.ndarray:
        """
        Sampled (x, y) positions, thinned evenly to at most ``n_points``.
        """
        array = self.to_numpy()[:, 1:3]
        n_points = n_points if n_points is not None else config.DEFAULT_PLOT_POINTS
        if n_points < 2:
            raise ValueError("n_points must be at least 2")
        if len(array) > n_points:
            idx = np.linspace(0, len(array) - 1, n_points).round().astype(int)
            array = array[idx]
        return array

    # ========== SPECIAL METHODS ==========
    def __len__(self):
        return len(self._samples)

    def __repr__(self):
        return f"FlightLog(samples={len(self)}, duration={self.duration:.3f})"

    # ========== PLOTTING ==========
    def plot(self, world: Optional["World"] = None, n_points: Optional[int] = None,
             path_color: Optional[str] = None) -> go.Figure:
        """
        Create a 2D plot of the flight path with the world's planets.

        Parameters:
            world: World whose planets and arena are drawn (optional)
            n_points: Maximum number of path points (default: config.DEFAULT_PLOT_POINTS)
            path_color: Color of the path line (default: config.DEFAULT_PATH_COLOR)

        Returns:
            Plotly Figure object
        """
        path_color = path_color if path_color is not None else config.DEFAULT_PATH_COLOR

        fig = go.Figure()

        if world is not None:
            for index, planet in enumerate(world.planets):
                cx, cy = planet.position.x, planet.position.y
                r = planet.radius
                fig.add_shape(
                    type='circle',
                    x0=cx - r, y0=cy - r, x1=cx + r, y1=cy + r,
                    fillcolor=planet.color,
                    line=dict(color=planet.color),
                    opacity=0.8,
                )
                # invisible marker so planets show up on hover
                fig.add_trace(go.Scatter(
                    x=[cx], y=[cy],
                    mode='markers',
                    marker=dict(size=1, color=planet.color),
                    name=f'{planet.role.value} #{index}',
                    hovertemplate=(f'{planet.role.value}<br>r = {r:.1f}'
                                   f'<br>m = {planet.mass:.1f}<extra></extra>'),
                    showlegend=False,
                ))

        self.add_to_plot(fig, n_points=n_points, color=path_color, name='Flight path')

        layout = dict(
            title='Flight Path',
            plot_bgcolor=config.DEFAULT_BACKGROUND_COLOR,
            xaxis=dict(title='x', zeroline=False),
            # screen coordinates: y grows downward
            yaxis=dict(title='y', scaleanchor='x', scaleratio=1,
                       autorange='reversed', zeroline=False),
            showlegend=True,
        )
        if world is not None:
            layout['xaxis']['range'] = [0, world.arena_width]
            layout['yaxis']['range'] = [world.arena_height, 0]
            layout['yaxis'].pop('autorange')
        fig.update_layout(**layout)

        return fig

    def add_to_plot(self, fig: go.Figure, n_points: Optional[int] = None,
                    color: str = 'red', name: Optional[str] = None,
                    **kwargs) -> go.Figure:
        """
        Add this flight path to an existing Plotly figure.

        Parameters:
            fig: Existing Plotly Figure object
            n_points: Maximum number of path points
            color: Color of the path line (default: 'red')
            name: Legend name for this path (default: 'Flight N')
            **kwargs: Additional arguments passed to Scatter

        Returns:
            Updated Plotly Figure object (same object, modified in place)
        """
        positions = self.positions(n_points)

        # Default name if not provided
        if name is None:
            n_existing = sum(1 for trace in fig.data
                             if isinstance(trace, go.Scatter) and trace.mode == 'lines')
            name = f'Flight {n_existing + 1}'

        fig.add_trace(go.Scatter(
            x=positions[:, 0],
            y=positions[:, 1],
            mode='lines',
            line=dict(color=color, width=2),
            name=name,
            hovertemplate='x: %{x:.1f}<br>y: %{y:.1f}<extra></extra>',
            **kwargs
        ))

        return fig
