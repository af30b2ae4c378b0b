"""Members-only web app with server-side sessions and admin role management."""
