"""Properties app package.

This app owns rental listings: the property model, stored images,
availability windows, search and the HTTP surface that hangs off a
single listing (availability quotes, booking, reviewing, rating and
favoriting).
"""
