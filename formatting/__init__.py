"""Declarative formatting settings for the bar chart visual.

The host renders its property pane purely from the model built here: cards of
typed option slices, plus one color slice per data category discovered at
refresh time.
"""
