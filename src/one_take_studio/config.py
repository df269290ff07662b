import os

from dotenv import load_dotenv

load_dotenv()


def _getbool(key: str, default: str = "false") -> bool:
    return os.getenv(key, default).lower() == "true"


# LLM Configuration
# Priority order: Groq > Gemini > Ollama (providers without a key are skipped)
GROQ_API_KEY = os.getenv("GROQ_API_KEY", "")
GROQ_MODEL = os.getenv("GROQ_MODEL", "llama-3.3-70b-versatile")
GROQ_BASE_URL = os.getenv("GROQ_BASE_URL", "https://api.groq.com/openai/v1")

GEMINI_API_KEY = os.getenv("GEMINI_API_KEY", "")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"

OLLAMA_BASE_URL = os.getenv("OLLAMA_BASE_URL", "http://localhost:11434")
OLLAMA_MODEL = os.getenv("OLLAMA_MODEL", "llama3.1:8b")
USE_OLLAMA_FALLBACK = _getbool("USE_OLLAMA_FALLBACK", "true")

LLM_TIMEOUT = int(os.getenv("LLM_TIMEOUT", "120"))  # seconds

# Speech-to-text (Deepgram)
DEEPGRAM_API_KEY = os.getenv("DEEPGRAM_API_KEY", "")
DEEPGRAM_MODEL = os.getenv("DEEPGRAM_MODEL", "nova-3")
DEEPGRAM_BASE_URL = os.getenv("DEEPGRAM_BASE_URL", "https://api.deepgram.com/v1")
STT_TIMEOUT = int(os.getenv("STT_TIMEOUT", "600"))  # seconds, long recordings take a while

# Transcript chunking
DEFAULT_CHUNK_DURATION = int(os.getenv("DEFAULT_CHUNK_DURATION", "30"))  # seconds
PAUSE_THRESHOLD = float(os.getenv("PAUSE_THRESHOLD", "1.5"))  # seconds of silence that ends a chunk

# Email (Resend)
RESEND_API_KEY = os.getenv("RESEND_API_KEY", "")
RESEND_FROM_EMAIL = os.getenv("RESEND_FROM_EMAIL", "onboarding@resend.dev")
RESEND_FROM_NAME = os.getenv("RESEND_FROM_NAME", "One-Take Studio")

# Server
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3001"))
MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(100 * 1024 * 1024)))  # 100MB
ALLOWED_MIME_TYPES = (
    "audio/mpeg",
    "audio/mp3",
    "audio/wav",
    "audio/wave",
    "audio/x-wav",
    "audio/mp4",
    "audio/m4a",
    "audio/ogg",
    "audio/webm",
    "video/mp4",
    "video/mpeg",
    "video/webm",
    "video/quicktime",
)

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
