# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
chartlay lays out statistical charts (bar, pie, scatter, timeline) from JSON chart specifications,
resolving mixed-unit dimensions against measured text into pixel-exact regions, ticks and marks.
'''

from .__about__ import __version__
