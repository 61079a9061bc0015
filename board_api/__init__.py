"""Board API: forum-style boards with JWT auth and file attachments."""
