"""
API package.

``router.py`` exposes a single ``router`` that includes every endpoint
module in ``endpoints``.  Dependencies shared by the endpoints live in
``deps.py``.
"""
