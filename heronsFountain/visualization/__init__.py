# -- Visualization Subpackage -- #

'''
Plotly time-series plots of headless fountain runs.
'''

from heronsFountain.visualization.historyPlots import plotLevelHistory, plotJetActivity
