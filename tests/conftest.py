"""Root conftest — shared test configuration."""

import os

# Required settings must exist before beesides.main is imported
os.environ.setdefault("SUPABASE_URL", "https://testref.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "anon-test-key")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "service-role-test-key")
os.environ.setdefault("MUSICBRAINZ_CONTACT", "tests@beesides.app")
os.environ.setdefault("LOG_FORMAT", "text")
