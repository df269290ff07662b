"""
Prompt builder – one deterministic prompt per content type.

Each builder is a pure function of the transcript (and, for the four content
generators, the analysis). The prompts spell out the JSON shape, the exact
number of items wanted and that line breaks must be escaped, because the
answer is fed straight into the parser.
"""

from typing import Callable, Dict, List

from one_take_studio.content.normalize import TWITTER_TEMPLATES, format_timestamp
from one_take_studio.domain.models import AnalysisResult, StructuredTranscript

_TEMPLATE_CHOICES = ", ".join(f'"{t}"' for t in TWITTER_TEMPLATES)

SYSTEM_INSTRUCTIONS: Dict[str, str] = {
    "analysis": (
        "You are an expert content analyst who finds the most engaging moments in content. "
        "Always respond with valid JSON only."
    ),
    "tiktok": (
        "You are a viral TikTok scriptwriter who creates engaging, shareable short-form video scripts. "
        "Always respond with valid JSON only."
    ),
    "twitter": (
        "You are a viral Twitter strategist who creates engaging, insightful threads. "
        "Always respond with valid JSON only."
    ),
    "linkedin": (
        "You are a LinkedIn content strategist who creates authentic, engaging professional posts. "
        "Always respond with valid JSON only."
    ),
    "newsletter": (
        "You are an expert newsletter writer who creates warm, engaging, insightful emails. "
        "Always respond with valid JSON only."
    ),
}

ESCAPE_RULES = (
    "CRITICAL: Escape all newlines inside string values as \\n. "
    "The response MUST be valid JSON that json.loads() can parse, with no text before or after it."
)

# JSON examples are raw strings so the model sees literal \n escapes
_ANALYSIS_EXAMPLE = r"""{
  "title": "Catchy Title Here",
  "topics": ["Topic1", "Topic2", "Topic3"],
  "spicyMoments": [
    {
      "timestamp": "3:24",
      "quote": "The most engaging quote from the transcript",
      "reason": "Why this is spicy/engaging"
    }
  ]
}"""

_TIKTOK_EXAMPLE = r"""{
  "scripts": [
    {
      "title": "Short punchy title (3-5 words)",
      "hook": "Nobody needs to wake up at 5am to be successful...",
      "content": "HOOK: [Close up face, whisper] \"Nobody needs to wake up at 5am...\"\n\nBEAT 1: [Pull back] \"The most successful people I know wake up when their body tells them to.\"\n\nBEAT 2: [B-roll of alarm clock] \"The 5am thing was invented by people who profit from your exhaustion.\"\n\nBEAT 3: [Direct to camera] \"Your optimal time is YOUR optimal time.\"\n\nCTA: \"What time do you actually wake up? Drop it below\"\n\nSHOT NOTES:\n- Film in low light for morning vibes\n- Duration: 30-45 seconds",
      "tags": ["productivity", "morningroutine", "hustle"]
    }
  ]
}"""

_TWITTER_EXAMPLE = r"""{
  "threads": [
    {
      "title": "Thread topic (5-7 words)",
      "template": "list",
      "content": "Thread on [topic]:\n\n1/ Hook tweet that grabs attention...\n\n2/ First key point with context...\n\n3/ Second point with example...\n\n4/ Final thought + CTA",
      "tags": ["tag1", "tag2"]
    }
  ]
}"""

_LINKEDIN_EXAMPLE = r"""{
  "posts": [
    {
      "title": "Post topic (5-7 words)",
      "content": "Opening hook or story...\n\nKey insight or lesson learned.\n\n3 shifts that changed everything:\n\n1. Point one\nExplanation\n\n2. Point two\nExplanation\n\n3. Point three\nExplanation\n\nWhat's one [topic] you've unlearned?\n\n#Hashtag1 #Hashtag2 #Hashtag3",
      "tags": ["tag1", "tag2"]
    }
  ]
}"""

_NEWSLETTER_EXAMPLE = r"""{
  "newsletters": [
    {
      "title": "Newsletter topic",
      "content": "SUBJECT: Compelling subject line\n\nHey friend,\n\nPersonal opening paragraph...\n\n---\n\nTHE MYTH: Common belief\nTHE TRUTH: Reality\n\n---\n\nTHREE THINGS I NOW KNOW:\n\n1. First insight\n\n2. Second insight\n\n3. Third insight\n\n---\n\nTHIS WEEK'S CHALLENGE:\n\nChallenge description...\n\nHit reply, I read every response.\n\n[Your name]\n\nP.S. Additional thought or teaser",
      "tags": ["newsletter", "topic"]
    }
  ]
}"""


def transcript_body(transcript: StructuredTranscript) -> str:
    """All chunk texts joined with single spaces."""
    return " ".join(chunk.get("text", "") for chunk in transcript.get("transcript") or [])


def timestamped_chunks(transcript: StructuredTranscript) -> str:
    """One '[M:SS - M:SS]: text' block per chunk, blank line between blocks."""
    return "\n\n".join(
        f"[{format_timestamp(chunk.get('start', 0))} - {format_timestamp(chunk.get('end', 0))}]: "
        f"{chunk.get('text', '')}"
        for chunk in transcript.get("transcript") or []
    )


def _analysis_context(transcript: StructuredTranscript, analysis: AnalysisResult) -> str:
    moments: List[str] = [
        f'[{m.get("timestamp", "")}] "{m.get("quote", "")}"'
        for m in analysis.get("spicyMoments") or []
    ]
    return (
        f"TRANSCRIPT:\n{transcript_body(transcript)}\n\n"
        f"TITLE: {analysis.get('title', '')}\n"
        f"TOPICS: {', '.join(analysis.get('topics') or [])}\n\n"
        f"SPICY MOMENTS:\n" + "\n".join(moments)
    )


def build_analysis_prompt(transcript: StructuredTranscript) -> str:
    return f"""You are an expert content analyst. Analyze this transcript and extract:

1. A catchy title (10 words max)
2. Main topics/themes (3-5 tags)
3. "Spicy moments" - the most engaging, controversial, or quotable parts with their timestamps

Transcript chunks with timestamps:
{timestamped_chunks(transcript)}

Respond in valid JSON format:
{_ANALYSIS_EXAMPLE}

IMPORTANT INSTRUCTIONS FOR TIMESTAMPS:
- Use SINGLE timestamps in M:SS or MM:SS format (e.g., "3:24", "12:15", "0:42")
- DO NOT use ranges (e.g., "0:00-0:29" is WRONG)
- Pick the START time of the chunk where the spicy moment begins

Find 3-5 spicy moments that are:
- Controversial or bold statements
- Surprising revelations
- Emotionally charged
- Quotable and shareable
- Challenging conventional wisdom

{ESCAPE_RULES}"""


def build_tiktok_prompt(transcript: StructuredTranscript, analysis: AnalysisResult) -> str:
    return f"""You are a viral TikTok scriptwriter. Based on this transcript and its spicy moments, create EXACTLY 2 TikTok scripts (30-45 seconds each).

CRITICAL: You MUST generate EXACTLY 2 scripts. No more, no less.

{_analysis_context(transcript, analysis)}

IMPORTANT:
- Make each script about ONE specific spicy moment or topic
- Use conversational, authentic language
- Put visual directions in [brackets] and spoken words in "quotes"
- The hook must grab attention immediately
- Vary energy, tone and approach between the two scripts
- Include practical shot notes for filming

Respond in valid JSON format with a "scripts" array. Each script has the fields "title", "hook", "content" and "tags":
{_TIKTOK_EXAMPLE}

FORMAT RULES:
- "hook" is only the attention-grabbing opening quote (no visual directions)
- "content" is the full script: HOOK, BEAT 1, BEAT 2, BEAT 3, CTA and SHOT NOTES
{ESCAPE_RULES}"""


def build_twitter_prompt(transcript: StructuredTranscript, analysis: AnalysisResult) -> str:
    return f"""You are a viral Twitter content strategist. Based on this transcript, create EXACTLY 2 Twitter threads using proven thread templates.

CRITICAL: You MUST generate EXACTLY 2 threads. No more, no less.

{_analysis_context(transcript, analysis)}

USE EXACTLY ONE OF THESE TEMPLATES PER THREAD (use a different one for each thread):

1. challenge - CHALLENGE YOUR AUDIENCE: open with "Challenge:" or a spicy question framed as a mini game ("Reply with ONE word"), end with the challenge CTA.
2. list - LISTS: step-by-step or tools/resources, short items with blank space between them, each item with context.
3. before-after - BEFORE/AFTER SNAPSHOT: "Before:" states, "Today:" states, then a one-line takeaway.
4. opposed-thoughts - DON'T DO THIS, DO THAT: call out the common mistake, then the counter approach with proof.
5. hidden-truth - HIDDEN TRUTHS: start with "Harsh truth:" or "Life hack:", then why it matters plus a mini example.
6. curation - CURATED GEMS: 4-6 resources, each "Resource - why it matters", end with "Who else should be on this list?".

Each thread should:
- Be 4-7 tweets, every tweet 280 characters or less
- Use conversational, punchy language with blank space for readability
- Name the chosen template in the opening tweet
- End with engagement (question, challenge, or CTA)
- Set "template" to exactly one of: {_TEMPLATE_CHOICES}

Respond in valid JSON format with a "threads" array. Each thread has the fields "title", "template", "content" and "tags":
{_TWITTER_EXAMPLE}

{ESCAPE_RULES}"""


def build_linkedin_prompt(transcript: StructuredTranscript, analysis: AnalysisResult) -> str:
    return f"""You are a professional LinkedIn content strategist. Based on this transcript, create EXACTLY 2 LinkedIn posts that drive professional engagement.

CRITICAL: You MUST generate EXACTLY 2 posts. No more, no less.

{_analysis_context(transcript, analysis)}

Each LinkedIn post should:
- Open with a compelling personal story or observation
- Share professional insights or lessons learned
- Use short paragraphs for readability
- Use a few simple markers (→, •, ✓, ✗)
- End with an engaging question
- Be authentic, professional but conversational

Respond in valid JSON format with a "posts" array. Each post has the fields "title", "content" and "tags":
{_LINKEDIN_EXAMPLE}

{ESCAPE_RULES}"""


def build_newsletter_prompt(transcript: StructuredTranscript, analysis: AnalysisResult) -> str:
    return f"""You are an expert newsletter writer. Based on this transcript, create EXACTLY 1 engaging newsletter email.

CRITICAL: You MUST generate EXACTLY 1 newsletter. No more, no less.

{_analysis_context(transcript, analysis)}

The newsletter should:
- Start with "SUBJECT: [Compelling subject line]"
- Open with "Hey friend," or a similar warm greeting
- Use clear section headers separated by ---
- Share 2-3 key insights or frameworks
- Include a "THIS WEEK'S CHALLENGE" section
- End with a warm sign-off and a P.S.

Respond in valid JSON format with a "newsletters" array holding one item with the fields "title", "content" and "tags":
{_NEWSLETTER_EXAMPLE}

{ESCAPE_RULES}"""


PROMPT_BUILDERS: Dict[str, Callable[[StructuredTranscript, AnalysisResult], str]] = {
    "tiktok": build_tiktok_prompt,
    "twitter": build_twitter_prompt,
    "linkedin": build_linkedin_prompt,
    "newsletter": build_newsletter_prompt,
}
