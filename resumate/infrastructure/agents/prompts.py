"""Prompt builders for every backend call.

Inputs are truncated to keep requests within model context limits.
"""

from resumate.domain.entities.profile import SearchPreferences, UserProfile

ANALYSIS_INPUT_LIMIT = 15_000
OUTREACH_JD_LIMIT = 3_000
OUTREACH_RESUME_LIMIT = 2_000
SEARCH_RESUME_LIMIT = 1_000


def gap_analysis_prompt(
    resume: str,
    job_description: str,
    known_facts: list[str],
    max_questions: int = 3,
) -> str:
    facts = "\n".join(known_facts) or "None yet."
    return f"""You are an expert career coach. Analyze the Resume and Job Description.

CONTEXT - KNOWN FACTS ABOUT CANDIDATE:
{facts}

RESUME:
{resume[:ANALYSIS_INPUT_LIMIT]}

JOB DESCRIPTION:
{job_description[:ANALYSIS_INPUT_LIMIT]}

TASK:
1. Check if the resume + known facts cover the critical requirements of the job description.
2. If critical info is still missing (a specific metric, how a skill was used), set needs_info
   to true and ask up to {max_questions} probing questions.
3. If the known facts fill the gap, set needs_info to false; generation will use them.
"""


def fact_extraction_prompt(transcript: str) -> str:
    return f"""Analyze the following conversation between a Career Coach AI and a Candidate.
Extract distinct, useful facts about the Candidate's experience, skills, or preferences
revealed in their answers. Each fact must stand alone
(e.g. "Led a team of 5 engineers using React"). Ignore trivial conversation.

CONVERSATION:
{transcript}
"""


def tailored_resume_prompt(resume: str, job_description: str, context: str) -> str:
    return f"""You are a professional resume writer.
Rewrite the resume to target the Job Description, strictly keeping its Markdown format.

FORMATTING RULES:
1. Keep the exact same Markdown structure (headers, spacing, bullet style).
2. Keep the same section order and the same contact header format.
3. Do not drastically change the length.

CONTENT RULES:
1. Do not fabricate. Use the Additional Context (learned facts and answers) to fill gaps truthfully.
2. Swap generic keywords for specific keywords found in the Job Description.
3. Rephrase bullet points to highlight achievements relevant to the job; quantify where possible.

ORIGINAL RESUME:
{resume}

ADDITIONAL CONTEXT (Known Facts & Answers):
{context}

TARGET JOB DESCRIPTION:
{job_description}
"""


def cover_letter_prompt(tailored_resume: str, job_description: str) -> str:
    return f"""Write a high-quality cover letter for this candidate.

TONE: confident, professional but human.
STRATEGY: focus on where the candidate's skills meet the company's pain points,
address the requirements in the job description directly, stay under 400 words.
FORMAT: Markdown.

RESUME:
{tailored_resume}

JOB DESCRIPTION:
{job_description}
"""


def outreach_prompt(job_description: str, tailored_resume: str) -> str:
    return f"""Extract the role and company from the job description.
Step 1: Use Google Search to identify the Hiring Manager, Talent Acquisition Lead,
or Engineering Director for this role.
Step 2: Draft a LinkedIn connection message (max 300 chars) highlighting the candidate's value.

Job Description:
{job_description[:OUTREACH_JD_LIMIT]}

Resume Summary:
{tailored_resume[:OUTREACH_RESUME_LIMIT]}
"""


def job_search_prompt(profile: UserProfile, prefs: SearchPreferences, max_results: int = 5) -> str:
    modes = ", ".join(m.value for m in prefs.work_modes) or "Any"
    return f"""You are an elite AI headhunter.

CLIENT PROFILE SUMMARY:
{profile.master_resume[:SEARCH_RESUME_LIMIT]}... (truncated)

SEARCH PARAMETERS:
- TARGET ROLES: {prefs.roles}
- TARGET LOCATIONS: {prefs.locations} (within a {prefs.radius} mile radius)
- WORK MODES: {modes}
- MINIMUM SALARY: {prefs.salary_min}

STRICT EXCLUSIONS: ignore any job containing these terms: {prefs.exclusions or "None"}

ADDITIONAL CLIENT INSTRUCTIONS:
{prefs.search_context or "None provided."}

LOCATION RULES:
1. "Remote" in WORK MODES: prioritize fully remote roles.
2. "Hybrid" in WORK MODES: roles in TARGET LOCATIONS that allow hybrid work.
3. "On-site" in WORK MODES: on-site roles in TARGET LOCATIONS.
4. Include nearby cities within the {prefs.radius} mile radius of listed cities.

TASK:
Use Google Search to find {max_results} active, high-quality job openings matching the parameters.
Boost matches with the client's resume skills and instructions; downrank low salary,
mismatching location or exclusion terms. Return the top {max_results} distinct opportunities,
best first, each with a match_score from 0 to 100 and a punchy reasoning.
"""
