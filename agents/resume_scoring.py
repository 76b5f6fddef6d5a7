"""Resume Scoring Engine: ATS-style scoring with section feedback."""
import re
from typing import Any, Dict, List
from agents.schemas import DetailedAnalysis, ExtractedResumeData, ResumeAnalysisResult, SectionScore
from services.llm_client import LLMClient, extract_json_object
from utils.logging_utils import get_logger

logger = get_logger(__name__)

DEFAULT_INDUSTRY = 'Software Engineering'

INDUSTRY_KEYWORDS: Dict[str, List[str]] = {
    'Software Engineering': [
        'JavaScript', 'Python', 'React', 'Node.js', 'AWS', 'Docker', 'Kubernetes',
        'Git', 'API', 'Database', 'Agile', 'Scrum', 'CI/CD', 'Microservices',
        'Cloud Computing', 'DevOps', 'MongoDB', 'PostgreSQL', 'Redis', 'GraphQL',
    ],
    'Data Science': [
        'Python', 'R', 'SQL', 'Machine Learning', 'Deep Learning', 'TensorFlow',
        'PyTorch', 'Pandas', 'NumPy', 'Scikit-learn', 'Statistics', 'Data Visualization',
        'Tableau', 'Power BI', 'Jupyter', 'Apache Spark', 'Hadoop', 'Big Data',
    ],
    'Digital Marketing': [
        'SEO', 'SEM', 'Google Analytics', 'Facebook Ads', 'Google Ads', 'Content Marketing',
        'Social Media Marketing', 'Email Marketing', 'Conversion Optimization', 'A/B Testing',
        'Marketing Automation', 'CRM', 'Lead Generation', 'Brand Management',
    ],
    'Product Management': [
        'Product Strategy', 'Roadmap Planning', 'User Research', 'A/B Testing', 'Analytics',
        'Agile', 'Scrum', 'JIRA', 'Product Launch', 'Stakeholder Management',
        'Market Research', 'Competitive Analysis', 'UX/UI', 'KPIs', 'OKRs',
    ],
    'Finance': [
        'Financial Analysis', 'Excel', 'Financial Modeling', 'Valuation', 'Risk Management',
        'Investment Banking', 'Portfolio Management', 'Accounting', 'GAAP', 'CFA',
        'Bloomberg', 'SQL', 'Python', 'Derivatives', 'Fixed Income',
    ],
}

SECTION_WEIGHTS = {
    'atsCompatibility': 0.25,
    'contentQuality': 0.25,
    'keywordOptimization': 0.20,
    'formatting': 0.15,
    'experienceRelevance': 0.15,
}

MAX_MISSING_KEYWORDS = 10

_BULLET_PATTERN = re.compile(r"[•\-\*]")
_NUMBER_PATTERN = re.compile(r"\d+")

SYSTEM_PROMPT = "You are an expert resume reviewer and ATS specialist. Return ONLY a valid JSON object."

EXTRACTION_PROMPT = """Analyze this resume and extract structured data. Return ONLY a valid JSON object:
{{
  "personalInfo": {{"name": "", "email": "", "phone": "", "location": "", "linkedin": "", "github": ""}},
  "skills": ["skill1", "skill2"],
  "experience": [{{"title": "", "company": "", "duration": "", "description": ""}}],
  "education": [{{"degree": "", "school": "", "year": "", "gpa": ""}}],
  "certifications": ["certification1"]
}}

Resume text:
{resume_text}"""

CONTENT_QUALITY_PROMPT = """Analyze this resume's content quality. Score from 0-100 based on:
- Clear, impactful descriptions with specific examples
- Quantified achievements (numbers, percentages, metrics)
- Professional language and tone
- Strong action verbs and active voice
- Relevance and specificity to role
- Results-oriented statements

Return ONLY a valid JSON object:
{{"score": 75, "feedback": ["..."], "improvements": ["..."]}}

Resume text:
{resume_text}"""

DETAILED_ANALYSIS_PROMPT = """Provide a precise analysis of this resume targeting the "{target_role}" position.
Overall ATS score: {overall_score}/100

Return ONLY a valid JSON object:
{{
  "strengths": ["specific, quantified strength"],
  "weaknesses": ["specific weakness"],
  "recommendations": ["concrete, actionable recommendation for {target_role}"],
  "industryComparison": "How this resume compares with top candidates for {target_role}"
}}

Resume text:
{resume_text}"""


def _empty_extracted_data() -> ExtractedResumeData:
    return {
        'personalInfo': {},
        'skills': [],
        'experience': [],
        'education': [],
        'certifications': [],
    }


def _ask_for_json(llm: LLMClient, user_prompt: str, purpose: str) -> Any:
    """Call the LLM and return its outermost JSON object, or None on any failure."""
    try:
        text = llm.chat(SYSTEM_PROMPT, user_prompt)
    except Exception as e:
        logger.warning(f"LLM call for {purpose} failed: {str(e)}")
        return None
    parsed = extract_json_object(text)
    if parsed is None:
        logger.warning(f"LLM response for {purpose} had no parseable JSON")
    return parsed


def _as_text_list(value: Any) -> List[str]:
    """A lone string becomes a one-item list; anything else that is not a list becomes empty."""
    if isinstance(value, str):
        return [value] if value.strip() else []
    if not isinstance(value, list):
        return []
    return [str(item) for item in value]


def extract_resume_data(resume_text: str, llm: LLMClient) -> ExtractedResumeData:
    """Structured contact, skills, experience and education data pulled out by the LLM."""
    parsed = _ask_for_json(llm, EXTRACTION_PROMPT.format(resume_text=resume_text), "data extraction")
    data = _empty_extracted_data()
    if not parsed:
        return data

    if isinstance(parsed.get('personalInfo'), dict):
        data['personalInfo'] = parsed['personalInfo']
    for key in ('skills', 'experience', 'education', 'certifications'):
        if isinstance(parsed.get(key), list):
            data[key] = parsed[key]
    return data


def analyze_ats_compatibility(resume_text: str, extracted_data: ExtractedResumeData) -> SectionScore:
    score = 100
    feedback: List[str] = []
    improvements: List[str] = []
    personal_info = extracted_data.get('personalInfo') or {}

    if not personal_info.get('email'):
        score -= 15
        feedback.append('❌ Missing email address')
        improvements.append('Add a professional email address')

    if not personal_info.get('phone'):
        score -= 10
        feedback.append('⚠️ Missing phone number')
        improvements.append('Include your phone number for contact')

    if not extracted_data.get('experience'):
        score -= 20
        feedback.append('❌ No work experience section found')
        improvements.append('Add a detailed work experience section')

    if not extracted_data.get('education'):
        score -= 15
        feedback.append('⚠️ No education section found')
        improvements.append('Include your educational background')

    if not extracted_data.get('skills'):
        score -= 15
        feedback.append('❌ No skills section found')
        improvements.append('Add a comprehensive skills section')

    # Table and column characters confuse ATS parsers
    if '|' in resume_text or '│' in resume_text:
        score -= 10
        feedback.append('⚠️ Complex formatting detected (tables/columns)')
        improvements.append('Use simple formatting without tables or columns')

    if score >= 80:
        feedback.append('✅ Good ATS compatibility')
    elif score >= 60:
        feedback.append('⚠️ Moderate ATS compatibility')
    else:
        feedback.append('❌ Poor ATS compatibility - needs significant improvement')

    return {'score': max(0, score), 'feedback': feedback, 'improvements': improvements}


def analyze_content_quality(resume_text: str, llm: LLMClient) -> SectionScore:
    parsed = _ask_for_json(llm, CONTENT_QUALITY_PROMPT.format(resume_text=resume_text), "content quality")
    score = parsed.get('score') if parsed else None
    if isinstance(score, bool) or not isinstance(score, (int, float)):
        return {
            'score': 70,
            'feedback': ['Content analysis completed'],
            'improvements': ['Consider adding more quantified achievements'],
        }
    return {
        'score': int(round(min(100, max(0, score)))),
        'feedback': _as_text_list(parsed.get('feedback')),
        'improvements': _as_text_list(parsed.get('improvements')),
    }


def analyze_keyword_optimization(resume_text: str, industry_keywords: List[str]) -> SectionScore:
    resume_lower = resume_text.lower()
    matched = [keyword for keyword in industry_keywords if keyword.lower() in resume_lower]
    missing = [keyword for keyword in industry_keywords if keyword.lower() not in resume_lower]

    match_percentage = len(matched) / len(industry_keywords) * 100 if industry_keywords else 0
    score = min(100, match_percentage + 20)

    feedback: List[str] = []
    if score >= 80:
        feedback.append('✅ Excellent keyword optimization')
    elif score >= 60:
        feedback.append('⚠️ Good keyword coverage, room for improvement')
    else:
        feedback.append('❌ Low keyword optimization')
    feedback.append(f"📊 Matched {len(matched)}/{len(industry_keywords)} industry keywords")

    return {
        'score': round(score),
        'matchedKeywords': matched,
        'missingKeywords': missing[:MAX_MISSING_KEYWORDS],
        'feedback': feedback,
    }


def analyze_formatting(resume_text: str) -> SectionScore:
    score = 100
    feedback: List[str] = []
    improvements: List[str] = []

    word_count = len(resume_text.split())
    if word_count < 200:
        score -= 20
        feedback.append('❌ Resume too short')
        improvements.append('Expand content to 300-800 words')
    elif word_count > 1000:
        score -= 15
        feedback.append('⚠️ Resume might be too long')
        improvements.append('Consider condensing to 1-2 pages')
    else:
        feedback.append('✅ Good length')

    if len(_BULLET_PATTERN.findall(resume_text)) < 5:
        score -= 10
        feedback.append('⚠️ Few bullet points detected')
        improvements.append('Use bullet points to highlight achievements')
    else:
        feedback.append('✅ Good use of bullet points')

    if len(_NUMBER_PATTERN.findall(resume_text)) < 5:
        score -= 15
        feedback.append('❌ Few quantifiable metrics')
        improvements.append('Add numbers, percentages, and measurable achievements')
    else:
        feedback.append('✅ Good use of quantifiable metrics')

    return {'score': max(0, score), 'feedback': feedback, 'improvements': improvements}


def analyze_experience_relevance(extracted_data: ExtractedResumeData, target_role: str) -> SectionScore:
    experience = extracted_data.get('experience') or []
    if not experience:
        return {
            'score': 0,
            'feedback': ['❌ No work experience found'],
            'improvements': ['Add relevant work experience'],
        }

    role_keywords = target_role.lower().split()
    relevant = 0
    for entry in experience:
        if not isinstance(entry, dict):
            continue
        entry_text = f"{entry.get('title', '')} {entry.get('description', '')}".lower()
        if any(keyword in entry_text for keyword in role_keywords):
            relevant += 1

    score = 100
    feedback: List[str] = []
    improvements: List[str] = []
    relevance_ratio = relevant / len(experience)

    if relevance_ratio >= 0.7:
        feedback.append('✅ High experience relevance')
    elif relevance_ratio >= 0.4:
        score -= 20
        feedback.append('⚠️ Moderate experience relevance')
        improvements.append('Highlight more relevant experience for the target role')
    else:
        score -= 40
        feedback.append('❌ Low experience relevance')
        improvements.append('Focus on experience that aligns with the target role')

    return {'score': max(0, score), 'feedback': feedback, 'improvements': improvements}


def generate_detailed_analysis(
    resume_text: str,
    target_role: str,
    overall_score: int,
    llm: LLMClient,
) -> DetailedAnalysis:
    prompt = DETAILED_ANALYSIS_PROMPT.format(
        target_role=target_role, overall_score=overall_score, resume_text=resume_text
    )
    parsed = _ask_for_json(llm, prompt, "detailed analysis")
    fallback: DetailedAnalysis = {
        'strengths': ['Resume analysis completed successfully'],
        'weaknesses': ['Some areas may need improvement'],
        'recommendations': ['Consider customizing for specific job applications'],
        'industryComparison': 'This resume shows potential for the target role with some improvements.',
    }
    if not parsed:
        return fallback

    analysis = dict(fallback)
    for key in ('strengths', 'weaknesses', 'recommendations'):
        if isinstance(parsed.get(key), list):
            analysis[key] = [str(item) for item in parsed[key]]
    if isinstance(parsed.get('industryComparison'), str):
        analysis['industryComparison'] = parsed['industryComparison']
    return analysis


def analyze_resume_content(
    resume_text: str,
    llm: LLMClient,
    target_role: str = 'Software Engineer',
    target_industry: str = DEFAULT_INDUSTRY,
) -> ResumeAnalysisResult:
    """
    Score a resume for a target role and industry.

    The LLM-assisted sections fall back to fixed defaults when the LLM is
    unavailable, so this never raises for upstream failures.

    Args:
        resume_text: Plain resume text
        llm: LLM client instance
        target_role: Role the resume is aimed at
        target_industry: Industry whose keyword list is used (unknown -> Software Engineering)

    Returns:
        Overall score, per-section scores, detailed analysis and extracted data
    """
    logger.info(f"Analyzing resume for {target_role} in {target_industry}")

    industry_keywords = INDUSTRY_KEYWORDS.get(target_industry, INDUSTRY_KEYWORDS[DEFAULT_INDUSTRY])
    extracted_data = extract_resume_data(resume_text, llm)

    sections: Dict[str, SectionScore] = {
        'atsCompatibility': analyze_ats_compatibility(resume_text, extracted_data),
        'contentQuality': analyze_content_quality(resume_text, llm),
        'keywordOptimization': analyze_keyword_optimization(resume_text, industry_keywords),
        'formatting': analyze_formatting(resume_text),
        'experienceRelevance': analyze_experience_relevance(extracted_data, target_role),
    }

    overall_score = round(sum(sections[name]['score'] * weight for name, weight in SECTION_WEIGHTS.items()))
    detailed_analysis = generate_detailed_analysis(resume_text, target_role, overall_score, llm)

    logger.info(f"Resume analysis completed. Score: {overall_score}/100")
    return {
        'overallScore': overall_score,
        'sections': sections,
        'detailedAnalysis': detailed_analysis,
        'extractedData': extracted_data,
    }
