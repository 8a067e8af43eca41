"""Reviews app package.

Authored reviews and anonymous ratings of properties, plus the rating
aggregate kept on each property.
"""
