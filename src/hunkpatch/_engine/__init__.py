"""Internal stages of the patch engine.

Nothing here is part of the public API; callers go through
:func:`hunkpatch.patch.apply_patch`.
"""
