"""Supabase Storage adapter for dish photos."""

from dataclasses import dataclass

from supabase import Client

from home_kitchen.services.menu_admin import ImageStorage


@dataclass
class SupabaseImageStorage(ImageStorage):
    """Stores dish photos in a public Supabase Storage bucket."""

    client: Client
    bucket: str = "dishes"

    def upload(self, path: str, data: bytes, content_type: str) -> str:
        """Upload bytes and return the public URL of the object."""
        bucket = self.client.storage.from_(self.bucket)
        bucket.upload(
            path=path,
            file=data,
            file_options={"content-type": content_type, "upsert": "false"},
        )
        return bucket.get_public_url(path)

    def remove(self, path: str) -> None:
        """Remove an uploaded object."""
        self.client.storage.from_(self.bucket).remove([path])
