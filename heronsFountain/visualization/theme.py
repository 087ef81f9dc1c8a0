# -- Visualization Theme -- #

'''
Dark-mode theme shared by the fountain history plots.

Sean Bowman [02/12/2026]
'''

# Plotly template
TEMPLATE = 'plotly_dark'

BLUE = '#42A5F5'
RED = '#EF5350'
GREEN = '#66BB6A'
ORANGE = '#FFA726'

WHITE = '#E0E0E0'
FLIP_BAND = 'rgba(171, 71, 188, 0.2)'

# One color per vessel role
VESSEL_COLORS = {
    'top': GREEN,
    'basin': BLUE,
    'reservoir': ORANGE,
}
