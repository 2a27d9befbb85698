# SPDX-License-Identifier: LGPL-3.0-or-later
from infinventory.drivers.signing import SigningResult


class FakeVerifier:
    """Signing verifier driven by a {file name: SigningResult} table."""

    def __init__(self, results=None, raise_for=()):
        self.results = dict(results or {})
        self.raise_for = set(raise_for)
        self.calls = []

    def verify(self, inf_path):
        self.calls.append(inf_path.name)
        if inf_path.name in self.raise_for:
            raise OSError(f"verification tool crashed on {inf_path.name}")
        return self.results.get(inf_path.name, SigningResult.unsigned())
