from ...core.config import Config
from ...core.database import Database, utcnow_iso, dump_list, load_list
from .models import validate_project

TABLE = Config.PROJECTS_TABLE

_SELECT_COLS = 'id, title, description, images, category, created_at, updated_at'


def _row_to_dict(row):
    """Convert a DB row to a project dict"""
    return {
        'id': row['id'],
        'title': row['title'],
        'description': row['description'],
        'images': load_list(row['images']),
        'category': row['category'],
        'created_at': row['created_at'],
        'updated_at': row['updated_at'],
    }


class ProjectDatabase:
    @staticmethod
    def init_table():
        """Create the projects table and bring older schemas up to date"""
        conn = Database.connect()
        try:
            cursor = conn.cursor()
            cursor.execute(f'''
                CREATE TABLE IF NOT EXISTS {TABLE} (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    title TEXT NOT NULL,
                    description TEXT NOT NULL,
                    images TEXT,
                    category TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            ''')
            conn.commit()

            # Older databases only have the single `image` column
            Database.add_missing_columns(conn, TABLE, [('images', 'TEXT')])
            cursor.execute(f'CREATE INDEX IF NOT EXISTS idx_projects_created ON {TABLE}(created_at)')
            conn.commit()
        finally:
            conn.close()

    @staticmethod
    def get_all():
        """All projects, newest created first"""
        conn = Database.connect()
        try:
            rows = conn.execute(f'''
                SELECT {_SELECT_COLS} FROM {TABLE}
                ORDER BY created_at DESC, id DESC
            ''').fetchall()
            return [_row_to_dict(row) for row in rows]
        finally:
            conn.close()

    @staticmethod
    def get(project_id):
        """Get single project by ID"""
        conn = Database.connect()
        try:
            row = conn.execute(f'SELECT {_SELECT_COLS} FROM {TABLE} WHERE id = ?',
                               (project_id,)).fetchone()
            return _row_to_dict(row) if row else None
        finally:
            conn.close()

    @staticmethod
    def count():
        conn = Database.connect()
        try:
            return conn.execute(f'SELECT COUNT(*) FROM {TABLE}').fetchone()[0]
        finally:
            conn.close()

    @staticmethod
    def create(data):
        """Validate and insert a project, returns the stored record"""
        fields = validate_project(data)
        now = utcnow_iso()

        conn = Database.connect()
        try:
            cursor = conn.cursor()
            cursor.execute(f'''
                INSERT INTO {TABLE} (title, description, images, category, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?)
            ''', (fields['title'], fields['description'], dump_list(fields['images']),
                  fields['category'], now, now))
            conn.commit()
            project_id = cursor.lastrowid
        finally:
            conn.close()

        return ProjectDatabase.get(project_id)

    @staticmethod
    def update(project_id, data):
        """Replace title/description/category/images, returns the record or None if missing"""
        fields = validate_project(data)

        conn = Database.connect()
        try:
            cursor = conn.cursor()
            cursor.execute(f'''
                UPDATE {TABLE}
                SET title = ?, description = ?, images = ?, category = ?, updated_at = ?
                WHERE id = ?
            ''', (fields['title'], fields['description'], dump_list(fields['images']),
                  fields['category'], utcnow_iso(), project_id))
            conn.commit()
            if cursor.rowcount == 0:
                return None
        finally:
            conn.close()

        return ProjectDatabase.get(project_id)

    @staticmethod
    def delete(project_id):
        """Delete project, True if a row was removed"""
        conn = Database.connect()
        try:
            cursor = conn.cursor()
            cursor.execute(f'DELETE FROM {TABLE} WHERE id = ?', (project_id,))
            conn.commit()
            return cursor.rowcount > 0
        finally:
            conn.close()

    @staticmethod
    def insert_many(projects):
        """Bulk insert used by seeding; every record is validated first"""
        cleaned = [validate_project(p) for p in projects]
        now = utcnow_iso()

        conn = Database.connect()
        try:
            conn.executemany(f'''
                INSERT INTO {TABLE} (title, description, images, category, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?)
            ''', [(p['title'], p['description'], dump_list(p['images']), p['category'], now, now)
                  for p in cleaned])
            conn.commit()
        finally:
            conn.close()
        return len(cleaned)

    @staticmethod
    def migrate_legacy_images():
        """Fold the legacy single `image` column into `images`.

        Rows whose `images` list is empty get `[image]`; the legacy column is
        cleared on every migrated row. Safe to run repeatedly.
        Returns the number of rows changed.
        """
        conn = Database.connect()
        try:
            if 'image' not in Database.get_columns(conn, TABLE):
                return 0

            rows = conn.execute(f'''
                SELECT id, images, image FROM {TABLE}
                WHERE image IS NOT NULL AND image != ''
            ''').fetchall()

            migrated = 0
            for row in rows:
                images = load_list(row['images'])
                if not images:
                    images = [row['image']]
                conn.execute(f'UPDATE {TABLE} SET images = ?, image = NULL WHERE id = ?',
                             (dump_list(images), row['id']))
                migrated += 1
            conn.commit()
            return migrated
        finally:
            conn.close()
