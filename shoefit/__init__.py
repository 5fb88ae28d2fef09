"""
Top-level package for the shoefit footwear size recommender.

This package turns a shopper's foot length and the signals taken from a
product page (measured size table, dropdown sizes, construction and
store/expert cues) into a size recommendation with an explanatory fit
note.  The decision engine is pure and in-process; ``api`` and ``cli``
are thin surfaces around it.  There are no side-effects on import.
"""
