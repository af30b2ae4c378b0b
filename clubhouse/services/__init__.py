"""Business logic: credential store, session store and the auth flow."""
