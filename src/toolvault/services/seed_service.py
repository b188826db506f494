"""Default bookmark seeding for an empty catalog."""
import logging

from sqlalchemy import Insert, func, insert, literal, select, text, union_all
from sqlalchemy.ext.asyncio import AsyncSession
from uuid6 import uuid7

from toolvault.models.bookmark import Bookmark

logger = logging.getLogger(__name__)

# Arbitrary constant identifying the seed lock among PostgreSQL advisory locks
SEED_LOCK_KEY = 0x546F6F6C5661  # "ToolVa"

DEFAULT_BOOKMARKS: list[dict[str, str]] = [
    {
        "name": "Canva",
        "url": "https://www.canva.com",
        "description": "Design anything — social media graphics, presentations, posters & more.",
        "logo": "https://img.icons8.com/fluency/96/canva.png",
    },
    {
        "name": "ChatGPT",
        "url": "https://chat.openai.com",
        "description": "AI-powered assistant for writing, coding and brainstorming.",
        "logo": "https://img.icons8.com/fluency/96/chatgpt.png",
    },
    {
        "name": "Freepik",
        "url": "https://www.freepik.com",
        "description": "Free vectors, photos, PSD and icons for your projects.",
        "logo": "https://img.icons8.com/fluency/96/freepik.png",
    },
    {
        "name": "GitHub",
        "url": "https://github.com",
        "description": "Code hosting platform for version control and collaboration.",
        "logo": "https://img.icons8.com/fluency/96/github.png",
    },
    {
        "name": "Figma",
        "url": "https://www.figma.com",
        "description": "Collaborative interface design tool for teams.",
        "logo": "https://img.icons8.com/fluency/96/figma.png",
    },
    {
        "name": "Notion",
        "url": "https://www.notion.so",
        "description": "All-in-one workspace for notes, docs, and project management.",
        "logo": "https://img.icons8.com/fluency/96/notion.png",
    },
    {
        "name": "Cobalt Tools",
        "url": "https://cobalt.tools/settings/video",
        "description": "Media downloader — save videos and audio from popular platforms.",
        "logo": "https://cobalt.tools/favicon.ico",
    },
    {
        "name": "Gemini",
        "url": "https://gemini.google.com",
        "description": "Google's AI assistant for creative and productive tasks.",
        "logo": "https://www.gstatic.com/lamda/images/gemini_favicon_f069958c85030456e93de685.png",
    },
    {
        "name": "NotebookLM",
        "url": "https://notebooklm.google.com",
        "description": "AI-powered research and note-taking tool by Google.",
        "logo": "https://notebooklm.google.com/favicon.ico",
    },
    {
        "name": "Grok",
        "url": "https://grok.com",
        "description": "xAI's conversational AI with real-time knowledge.",
        "logo": "https://grok.com/images/favicon.ico",
    },
    {
        "name": "Claude",
        "url": "https://claude.ai",
        "description": "Anthropic's helpful, harmless, and honest AI assistant.",
        "logo": "https://claude.ai/favicon.ico",
    },
    {
        "name": "Kimi",
        "url": "https://kimi.moonshot.cn",
        "description": "Moonshot AI's intelligent assistant with long-context support.",
        "logo": "https://kimi.moonshot.cn/favicon.ico",
    },
    {
        "name": "Google AI Studio",
        "url": "https://aistudio.google.com",
        "description": "Prototype and build with Google's generative AI models.",
        "logo": "https://aistudio.google.com/favicon.ico",
    },
    {
        "name": "OpenClaw",
        "url": "https://openclaw.com",
        "description": "Open-source AI tools and resources platform.",
        "logo": "https://openclaw.com/favicon.ico",
    },
    {
        "name": "DeepSeek",
        "url": "https://chat.deepseek.com",
        "description": "Advanced AI assistant for coding, math, and reasoning.",
        "logo": "https://chat.deepseek.com/favicon.ico",
    },
]


async def _acquire_seed_lock(db: AsyncSession) -> None:
    """
    Serialize concurrent seeders on PostgreSQL.

    The advisory lock is transaction-scoped: it is released on commit or
    rollback. Without it, two READ COMMITTED transactions could each pass the
    empty-table guard before either commits.
    """
    if db.get_bind().dialect.name == "postgresql":
        await db.execute(text("SELECT pg_advisory_xact_lock(:key)"), {"key": SEED_LOCK_KEY})


def _guarded_insert() -> Insert:
    """
    Build ``INSERT INTO bookmarks ... SELECT <defaults> WHERE NOT EXISTS (...)``.

    The emptiness check and the insert are one statement, so on SQLite the
    write lock is taken before the table is read and a second seeder waits
    for the first to commit.
    """
    columns = ["id", "name", "url", "description", "logo"]
    table = Bookmark.__table__
    rows = [
        select(
            *(
                literal(uuid7() if col == "id" else entry[col], table.c[col].type).label(col)
                for col in columns
            ),
        )
        for entry in DEFAULT_BOOKMARKS
    ]
    defaults = union_all(*rows).subquery()
    source = select(*(defaults.c[col] for col in columns)).where(
        ~select(Bookmark.id).exists(),
    )
    return insert(table).from_select(columns, source)


async def count_bookmarks(db: AsyncSession) -> int:
    """Count all stored bookmarks."""
    result = await db.execute(select(func.count()).select_from(Bookmark))
    return result.scalar_one()


async def ensure_seeded(db: AsyncSession) -> int:
    """
    Insert the default bookmarks if and only if the table is empty.

    Returns:
        Number of bookmarks inserted (0 when the table already had rows).

    Note: Does not commit. Locks taken here are held until the caller
    commits, so a concurrent seeder sees the inserted rows and inserts none.
    """
    await _acquire_seed_lock(db)

    result = await db.execute(_guarded_insert())
    inserted = max(result.rowcount, 0)
    if inserted:
        logger.info("Inserted %d default bookmarks", inserted)
    return inserted
