"""Intent resolution.

The intent layer turns a free-text chat message into a `FilterSet` and a `QueryIntent`, which are then
used to pick a fixed, parameterized SQL template.
"""
