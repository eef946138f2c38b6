#!/usr/bin/env python3
"""
Tempo CLI: maintenance commands.

Usage:
    python manage.py seed
    python manage.py sweep-history

seed           Create a small demo catalog (skipped if songs already exist).
sweep-history  Delete playback history older than PLAYBACK_RETENTION_DAYS.
"""

import sys

from dotenv import load_dotenv

DEMO_CATALOG = [
    ('Coldplay', [
        ('Fix You', 'Rock', 300, '/songs/fix-you.mp3'),
        ('Yellow', 'Rock', 270, '/songs/yellow.mp3'),
        ('Viva La Vida', 'Pop', 242, '/songs/viva-la-vida.mp3'),
    ]),
    ('Sơn Tùng M-TP', [
        ('Lạc Trôi', 'V-Pop', 233, '/songs/lac-troi.mp3'),
        ('Chúng Ta Của Hiện Tại', 'V-Pop', 301, '/songs/chung-ta-cua-hien-tai.mp3'),
    ]),
    ('Miles Davis', [
        ('So What', 'Jazz', 562, '/songs/so-what.mp3'),
        ('Blue in Green', 'Jazz', 337, '/songs/blue-in-green.mp3'),
    ]),
]


def seed():
    """Create the demo catalog."""
    from app import create_app
    app = create_app()

    with app.app_context():
        from app.models import db, Artist, Song

        if Song.query.count() > 0:
            print("Catalog already has songs, nothing to seed.")
            return

        created = 0
        for artist_name, songs in DEMO_CATALOG:
            artist = Artist(name=artist_name)
            db.session.add(artist)
            for title, genre, duration, url in songs:
                db.session.add(Song(
                    title=title,
                    genre=genre,
                    duration_seconds=duration,
                    media_url=url,
                    artist=artist,
                ))
                created += 1
        db.session.commit()
        print(f"✅ Seeded {created} songs by {len(DEMO_CATALOG)} artists")


def sweep_history():
    """Run the playback retention sweep once."""
    from app import create_app
    from config import config
    app = create_app()

    with app.app_context():
        from app.models import db
        from app.services.retention import sweep_playback_history, purge_expired_tokens

        deleted = sweep_playback_history(db.session, config.PLAYBACK_RETENTION_DAYS)
        purged = purge_expired_tokens(db.session)
        print(f"✅ Deleted {deleted} playback events older than "
              f"{config.PLAYBACK_RETENTION_DAYS} days, purged {purged} expired token(s)")


COMMANDS = {
    'seed': seed,
    'sweep-history': sweep_history,
}


def main():
    load_dotenv()

    if len(sys.argv) < 2:
        print("Usage: python manage.py <command>")
        print("Commands:")
        print("  seed            Create a demo catalog")
        print("  sweep-history   Delete playback history past the retention window")
        sys.exit(1)

    command = COMMANDS.get(sys.argv[1])
    if command is None:
        print(f"❌ Unknown command: {sys.argv[1]}")
        sys.exit(1)
    command()


if __name__ == '__main__':
    main()
