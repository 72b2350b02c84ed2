"""SQLite schema and optional demo content.

Statements are idempotent (``IF NOT EXISTS``) and run on every startup.
"""

SCHEMA_STATEMENTS: tuple[str, ...] = (
    """CREATE TABLE IF NOT EXISTS profiles (
           id INTEGER PRIMARY KEY,
           name TEXT NOT NULL,
           title TEXT NOT NULL,
           location TEXT NOT NULL,
           email TEXT NOT NULL,
           phone TEXT,
           linkedin TEXT,
           summary TEXT NOT NULL,
           updated_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
       )""",
    """CREATE TABLE IF NOT EXISTS experiences (
           id INTEGER PRIMARY KEY AUTOINCREMENT,
           company TEXT NOT NULL,
           position TEXT NOT NULL,
           start_date TEXT NOT NULL,
           end_date TEXT,
           description TEXT NOT NULL,
           location TEXT NOT NULL,
           is_current INTEGER NOT NULL DEFAULT 0,
           created_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP,
           updated_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
       )""",
    """CREATE TABLE IF NOT EXISTS skills (
           id INTEGER PRIMARY KEY AUTOINCREMENT,
           name TEXT NOT NULL,
           category TEXT NOT NULL,
           level TEXT NOT NULL,
           years_of_experience INTEGER,
           description TEXT,
           created_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP,
           updated_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
       )""",
    """CREATE TABLE IF NOT EXISTS education (
           id INTEGER PRIMARY KEY AUTOINCREMENT,
           institution TEXT NOT NULL,
           degree TEXT NOT NULL,
           field TEXT NOT NULL,
           start_date TEXT NOT NULL,
           end_date TEXT,
           gpa REAL,
           description TEXT,
           created_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP,
           updated_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
       )""",
    """CREATE TABLE IF NOT EXISTS certifications (
           id INTEGER PRIMARY KEY AUTOINCREMENT,
           name TEXT NOT NULL,
           issuer TEXT NOT NULL,
           issue_date TEXT NOT NULL,
           expiry_date TEXT,
           credential_id TEXT,
           url TEXT,
           description TEXT,
           created_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP,
           updated_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
       )""",
    """CREATE TABLE IF NOT EXISTS projects (
           id INTEGER PRIMARY KEY AUTOINCREMENT,
           title TEXT NOT NULL,
           description TEXT NOT NULL,
           short_description TEXT,
           technologies TEXT NOT NULL DEFAULT '[]',
           github_url TEXT,
           live_url TEXT,
           image_url TEXT,
           start_date TEXT NOT NULL,
           end_date TEXT,
           status TEXT NOT NULL,
           featured INTEGER NOT NULL DEFAULT 0,
           sort_order INTEGER NOT NULL DEFAULT 0,
           created_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP,
           updated_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
       )""",
    "CREATE INDEX IF NOT EXISTS idx_experiences_start ON experiences (start_date)",
    "CREATE INDEX IF NOT EXISTS idx_skills_category ON skills (category, name)",
    "CREATE INDEX IF NOT EXISTS idx_projects_order ON projects (sort_order, start_date)",
)

# Inserted only when the profiles table is empty and seeding is enabled
DEMO_SEED_STATEMENTS: tuple[tuple[str, tuple], ...] = (
    (
        """INSERT INTO profiles (id, name, title, location, email, phone, linkedin, summary)
           VALUES (1, ?, ?, ?, ?, ?, ?, ?)""",
        (
            "Alex Morgan",
            "Backend Engineer",
            "Lisbon, Portugal",
            "alex.morgan@example.com",
            None,
            "https://www.linkedin.com/in/alex-morgan-example",
            "Backend engineer building APIs, data pipelines and the tooling around them.",
        ),
    ),
    (
        """INSERT INTO experiences
               (company, position, start_date, end_date, description, location, is_current)
           VALUES (?, ?, ?, ?, ?, ?, ?)""",
        (
            "Example Corp",
            "Senior Backend Engineer",
            "2021-03-01",
            None,
            "Owns the public REST API and its rate limiting, caching and observability.",
            "Remote",
            1,
        ),
    ),
    (
        """INSERT INTO skills (name, category, level, years_of_experience)
           VALUES (?, ?, ?, ?)""",
        ("Python", "Languages", "Expert", 8),
    ),
    (
        """INSERT INTO skills (name, category, level, years_of_experience)
           VALUES (?, ?, ?, ?)""",
        ("SQL", "Databases", "Advanced", 7),
    ),
    (
        """INSERT INTO education (institution, degree, field, start_date, end_date)
           VALUES (?, ?, ?, ?, ?)""",
        ("University of Lisbon", "BSc", "Computer Science", "2012-09-01", "2015-07-01"),
    ),
    (
        """INSERT INTO projects
               (title, description, technologies, start_date, status, featured, sort_order)
           VALUES (?, ?, ?, ?, ?, ?, ?)""",
        (
            "Portfolio API",
            "Read-mostly REST API serving this portfolio's content.",
            '["Python", "FastAPI", "SQLite"]',
            "2024-01-15",
            "Completed",
            1,
            1,
        ),
    ),
)
