# -- Fountain History Visualizations -- #

'''
Plotly figures of a headless run's level, pressure and jet history.

Both functions take the 'history' dict returned by FountainRunner.run().

Sean Bowman [02/12/2026]
'''

from __future__ import annotations

import numpy as np
import plotly.graph_objects as go
from plotly.subplots import make_subplots

from heronsFountain.visualization import theme


def _flipWindows(times: np.ndarray, flipping: np.ndarray) -> list[tuple[float, float]]:
    '''Contiguous (start, end) spans where the flipping flag is set.'''
    windows = []
    start = None
    for t, flag in zip(times, flipping):
        if flag and start is None:
            start = t
        elif not flag and start is not None:
            windows.append((start, t))
            start = None
    if start is not None and len(times):
        windows.append((start, times[-1]))
    return windows


def plotLevelHistory(history: dict[str, np.ndarray]) -> go.Figure:
    '''
    Vessel levels and air pressure vs time, with flip windows shaded.

    Parameters:
    -----------
    history : dict[str, np.ndarray]
        Runner history ('times', 'top', 'basin', 'reservoir', 'pressure', 'flipping')

    Returns:
    --------
    go.Figure : Plotly figure with 2 subplots
    '''
    times = np.asarray(history['times'])

    fig = make_subplots(
        rows=2, cols=1, shared_xaxes=True,
        subplot_titles=('Vessel Levels', 'Air Pressure'),
    )

    for key, name in (('top', 'Top'), ('basin', 'Basin'), ('reservoir', 'Reservoir')):
        fig.add_trace(go.Scatter(
            x=times, y=np.asarray(history[key]) * 100,
            mode='lines', name=name, line=dict(color=theme.VESSEL_COLORS[key], width=2)),
            row=1, col=1,
        )

    fig.add_trace(go.Scatter(
        x=times, y=np.asarray(history['pressure']) * 100,
        mode='lines', name='Pressure', line=dict(color=theme.RED, width=2)),
        row=2, col=1,
    )

    for start, end in _flipWindows(times, np.asarray(history['flipping'])):
        fig.add_vrect(x0=start, x1=end, fillcolor=theme.FLIP_BAND, line_width=0)

    fig.update_yaxes(title_text='Level (%)', range=[0, 100], row=1, col=1)
    fig.update_yaxes(title_text='Pressure (%)', range=[0, 100], row=2, col=1)
    fig.update_xaxes(title_text='Time (s)', row=2, col=1)

    fig.update_layout(
        title="Heron's Fountain Cycle",
        template=theme.TEMPLATE,
        height=600,
    )

    return fig


def plotJetActivity(history: dict[str, np.ndarray]) -> go.Figure:
    '''Alive droplets and active ripple count vs time.'''
    times = np.asarray(history['times'])

    fig = go.Figure()

    fig.add_trace(go.Scatter(
        x=times, y=history['aliveParticles'],
        mode='lines', name='Alive droplets',
        fill='tozeroy', line=dict(color=theme.BLUE),
    ))
    fig.add_trace(go.Scatter(
        x=times, y=history['ripples'],
        mode='lines', name='Ripples', yaxis='y2',
        line=dict(color=theme.WHITE, width=2),
    ))

    fig.update_layout(
        title='Jet Activity',
        xaxis_title='Time (s)',
        yaxis=dict(title='Droplets'),
        yaxis2=dict(title='Ripples', overlaying='y', side='right'),
        template=theme.TEMPLATE,
        height=400,
    )

    return fig
