"""ASGI request pipeline: binding, dispatch, error translation, sending."""
