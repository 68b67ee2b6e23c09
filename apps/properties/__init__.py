"""Properties app package.

Holds the property listing record the booking engine reads from: owner,
nightly price and the availability flag. Listing CRUD lives outside this
project; only the lookups the engine needs are exposed here.
"""
