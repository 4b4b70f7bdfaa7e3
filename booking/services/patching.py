"""
patching.py
-----------
Sparse patch: apply only the keys that are present.

``changes`` is the ``validated_data`` of a DRF serializer run with
``partial=True``. DRF leaves omitted keys out of ``validated_data`` and keeps
explicit nulls as ``None``, so "absent" and "set to null" stay distinct all
the way down to the model.
"""


def apply_sparse_patch(instance, changes, allowed_fields):
    """
    Copy ``changes`` onto ``instance`` for the whitelisted fields.

    Returns the list of field names whose value actually changed, ready for
    ``save(update_fields=...)``. Keys outside ``allowed_fields`` are ignored.
    """
    changed = []
    for field in allowed_fields:
        if field not in changes:
            continue
        value = changes[field]
        if getattr(instance, field) != value:
            setattr(instance, field, value)
            changed.append(field)
    return changed
