"""
Application package.

Layers, leaf first: ``core`` (config, logging, db, exceptions),
``models`` (stored dataclasses), ``schemas`` (wire DTOs),
``repositories`` (SQL), ``services`` (business rules) and ``api``
(HTTP routes).  ``main.create_app`` wires them together.
"""
