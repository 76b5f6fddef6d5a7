import json
from agents.resume_scoring import (
    INDUSTRY_KEYWORDS,
    analyze_ats_compatibility,
    analyze_content_quality,
    analyze_experience_relevance,
    analyze_formatting,
    analyze_keyword_optimization,
    analyze_resume_content,
    extract_resume_data,
)

FULL_DATA = {
    'personalInfo': {'name': 'Asha Rao', 'email': 'asha@example.com', 'phone': '+91 98450 00000'},
    'skills': ['Python', 'Django'],
    'experience': [
        {'title': 'Software Engineer', 'company': 'Acme', 'description': 'Built payment APIs'},
        {'title': 'Intern', 'company': 'Beta', 'description': 'Wrote test automation'},
    ],
    'education': [{'degree': 'B.Tech', 'school': 'NIT'}],
    'certifications': [],
}

EMPTY_DATA = {'personalInfo': {}, 'skills': [], 'experience': [], 'education': [], 'certifications': []}

LONG_RESUME = "\n".join(
    [f"- Improved service latency by {i}0% for {i} teams using Python and Docker" for i in range(1, 30)]
)


def _routing_reply(extraction, content_quality, detailed):
    def reply(user_prompt):
        if 'extract structured data' in user_prompt:
            return json.dumps(extraction)
        if 'content quality' in user_prompt:
            return json.dumps(content_quality)
        return detailed
    return reply


def test_ats_compatibility_clean_resume():
    section = analyze_ats_compatibility("Plain resume text", FULL_DATA)
    assert section['score'] == 100
    assert section['feedback'] == ['✅ Good ATS compatibility']
    assert section['improvements'] == []


def test_ats_compatibility_deductions():
    section = analyze_ats_compatibility("Skills | Experience", EMPTY_DATA)
    assert section['score'] == 15
    assert len(section['improvements']) == 6
    assert section['feedback'][-1].startswith('❌ Poor ATS compatibility')


def test_keyword_optimization():
    section = analyze_keyword_optimization("Python, Docker and Git", INDUSTRY_KEYWORDS['Software Engineering'])
    assert section['matchedKeywords'] == ['Python', 'Docker', 'Git']
    assert section['score'] == 35
    assert len(section['missingKeywords']) == 10
    assert section['feedback'][1] == '📊 Matched 3/20 industry keywords'


def test_formatting_penalties():
    assert analyze_formatting("Short resume without much detail")['score'] == 55
    assert analyze_formatting(LONG_RESUME)['score'] == 100


def test_experience_relevance():
    assert analyze_experience_relevance(EMPTY_DATA, 'Software Engineer')['score'] == 0
    assert analyze_experience_relevance(FULL_DATA, 'Software Engineer')['score'] == 80
    assert analyze_experience_relevance(FULL_DATA, 'Nurse')['score'] == 60

    relevant = dict(FULL_DATA, experience=FULL_DATA['experience'][:1])
    assert analyze_experience_relevance(relevant, 'Software Engineer')['score'] == 100


def test_extract_resume_data_keeps_only_well_formed_fields(fake_llm):
    reply = json.dumps({'personalInfo': 'Asha', 'skills': ['Python'], 'experience': 'lots'})
    data = extract_resume_data("resume", fake_llm(reply=reply))
    assert data == dict(EMPTY_DATA, skills=['Python'])


def test_analyze_resume_content_with_llm(fake_llm):
    llm = fake_llm(reply=_routing_reply(
        FULL_DATA,
        {'score': 88, 'feedback': ['Strong metrics'], 'improvements': ['More verbs']},
        'Analysis: {"strengths": ["Clear impact"], "weaknesses": [], "recommendations": ["Add AWS"],'
        ' "industryComparison": "Above average"}',
    ))

    result = analyze_resume_content(LONG_RESUME, llm, 'Software Engineer', 'Software Engineering')

    sections = result['sections']
    assert sections['atsCompatibility']['score'] == 100
    assert sections['contentQuality']['score'] == 88
    assert sections['formatting']['score'] == 100
    assert sections['experienceRelevance']['score'] == 80
    expected = round(100 * 0.25 + 88 * 0.25 + sections['keywordOptimization']['score'] * 0.20 + 100 * 0.15 + 80 * 0.15)
    assert result['overallScore'] == expected
    assert result['detailedAnalysis']['strengths'] == ['Clear impact']
    assert result['detailedAnalysis']['industryComparison'] == 'Above average'
    assert result['extractedData']['personalInfo']['email'] == 'asha@example.com'
    assert len(llm.calls) == 3


def test_analyze_resume_content_when_llm_is_down(fake_llm):
    result = analyze_resume_content(LONG_RESUME, fake_llm(error=RuntimeError("Gemini API error")))

    assert result['extractedData'] == EMPTY_DATA
    assert result['sections']['contentQuality'] == {
        'score': 70,
        'feedback': ['Content analysis completed'],
        'improvements': ['Consider adding more quantified achievements'],
    }
    assert result['sections']['atsCompatibility']['score'] == 25
    assert result['sections']['experienceRelevance']['score'] == 0
    assert result['detailedAnalysis']['strengths'] == ['Resume analysis completed successfully']
    assert 0 <= result['overallScore'] <= 100


def test_unknown_industry_uses_software_keywords(fake_llm):
    result = analyze_resume_content(LONG_RESUME, fake_llm(reply="no json"), target_industry='Astronomy')
    assert result['sections']['keywordOptimization']['matchedKeywords'] == ['Python', 'Docker']


def test_content_quality_accepts_single_string_feedback(fake_llm):
    reply = json.dumps({'score': 80, 'feedback': 'Strong verbs', 'improvements': 'Add metrics'})
    assert analyze_content_quality(LONG_RESUME, fake_llm(reply=reply)) == {
        'score': 80,
        'feedback': ['Strong verbs'],
        'improvements': ['Add metrics'],
    }


def test_content_quality_drops_malformed_lists(fake_llm):
    reply = json.dumps({'score': 104.6, 'feedback': {'note': 'x'}, 'improvements': ['Add metrics', 3]})
    section = analyze_content_quality(LONG_RESUME, fake_llm(reply=reply))
    assert section == {'score': 100, 'feedback': [], 'improvements': ['Add metrics', '3']}
