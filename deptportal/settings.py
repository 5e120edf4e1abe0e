"""Institution branding shared by every dashboard, with synchronous change listeners."""

import logging

logger = logging.getLogger(__name__)

DEFAULT_INSTITUTION_NAME = "Dr. N.G.P. INSTITUTE OF TECHNOLOGY"


class InstitutionSettings:
    def __init__(self, institution_name=DEFAULT_INSTITUTION_NAME, logo_url=None):
        self._values = {"institution_name": institution_name, "logo_url": logo_url}
        self._listeners = []

    def get(self):
        return dict(self._values)

    def subscribe(self, listener):
        """Register ``listener(settings)``; returns a callable that removes it again."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def update(self, **changes):
        unknown = set(changes) - set(self._values)
        if unknown:
            raise KeyError(f"Unknown settings: {', '.join(sorted(unknown))}")
        self._values.update(changes)
        snapshot = self.get()
        # Registration order; a failing listener stops the rest and reaches the caller
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Settings listener %r failed", listener)
                raise
        return snapshot


institution = InstitutionSettings()
