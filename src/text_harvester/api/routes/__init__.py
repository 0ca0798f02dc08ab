"""Route modules mounted by :func:`text_harvester.api.main.create_app`."""
