"""Built-in CLI sub-commands for jwtbearer.

* :mod:`~jwtbearer.commands.token` -- ``token``, ``assertion`` and ``whoami``,
  registered directly on the root app.
* :mod:`~jwtbearer.commands.provider` -- the ``provider`` sub-command group.
"""
