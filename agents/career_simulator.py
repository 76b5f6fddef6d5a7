"""Career Path Simulator: multi-year career paths for a student profile."""
from typing import Any, Dict, List
from agents.errors import UpstreamError
from agents.schemas import CareerMilestone, SimulatedCareerPath, SimulationProfile, SimulationResult
from services.llm_client import LLMClient, extract_json_object
from utils.logging_utils import get_logger

logger = get_logger(__name__)

CRITICAL_SKILLS = [
    'Machine Learning', 'Cloud Computing', 'System Design',
    'Data Structures', 'Algorithms', 'API Development',
    'Database Design', 'Security Best Practices',
]
MAX_CRITICAL_GAPS = 5

KEY_COMPANIES = ['Google', 'Microsoft', 'Amazon', 'Flipkart', 'Swiggy', 'Zomato']
ALTERNATIVE_PATHS = ['DevOps Engineer', 'Technical Architect', 'Startup Founder']
EMERGING_OPPORTUNITIES = ['AI Integration Specialist', 'Remote Team Lead', 'Tech Content Creator']

# (id, title, description, required skills, growth, demand, starting salary, mid-career salary)
SAMPLE_PATHS = [
    ('fullstack-developer', 'Full Stack Developer',
     'Build end-to-end web applications using modern technologies',
     ['JavaScript', 'React', 'Node.js'], 'High', 'Booming', '₹6-12 LPA', '₹15-30 LPA'),
    ('data-scientist', 'Data Scientist',
     'Extract insights from data to drive business decisions',
     ['Python', 'Statistics', 'Machine Learning'], 'Exponential', 'Very High', '₹8-15 LPA', '₹20-40 LPA'),
    ('product-manager', 'Product Manager',
     'Drive product strategy and coordinate cross-functional teams',
     ['Strategy', 'Analytics', 'Communication'], 'High', 'High', '₹10-18 LPA', '₹25-50 LPA'),
]

SYSTEM_PROMPT = """You are an expert AI career advisor specializing in the Indian job market and global opportunities.
Respond with a single JSON object that can be parsed programmatically."""


def build_simulation_prompt(profile: SimulationProfile) -> str:
    """Compose the user prompt for a career simulation."""
    return f"""Analyze the following student profile and provide a comprehensive career path simulation.

STUDENT PROFILE:
- Current Skills: {', '.join(profile.get('skills', []))}
- Interests: {', '.join(profile.get('interests', []))}
- Experience Level: {profile.get('experience', '')}
- Education: {profile.get('education', '')}
- Location: {profile.get('location', '')}
- Preferred Industries: {', '.join(profile.get('preferredIndustries', []))}
- Career Goals: {profile.get('careerGoals', '')}
- Time Horizon: {profile.get('timeHorizon', '3-year')}

Return JSON with these keys:
- "recommendedPaths": top 5 paths, each with id, title, description, matchScore (0-100),
  growthPotential, industryDemand, averageStartingSalary, averageMidCareerSalary (INR),
  keyCompanies (hiring in India), milestones (timeframe, title, description, requiredSkills,
  skillsToAcquire, averageSalary, jobMarketDemand, projectsSuggestions, certifications, courses),
  totalSkillGap, estimatedTimeToReady, alternativePaths, emergingOpportunities
- "skillGapAnalysis": criticalGaps, quickWins (learnable in 3-6 months), longTermSkills (1-2 years)
- "marketInsights": trendingSkills, decliningSkills, emergingRoles, industryGrowth (industry -> rating)
- "personalizedRecommendations": immediateActions (next 30 days), shortTermGoals (3-6 months),
  longTermStrategy (1-3 years)

Focus on Indian salary ranges, remote/hybrid opportunities, startup vs MNC paths,
skills-based hiring and the impact of AI/automation. Keep timelines realistic."""


def calculate_match_score(user_skills: List[str], required_skills: List[str]) -> int:
    """Percentage of required skills covered, matching substrings in either direction."""
    if not required_skills:
        return 0
    matches = 0
    for skill in user_skills:
        skill_lower = skill.lower()
        if any(skill_lower in req.lower() or req.lower() in skill_lower for req in required_skills):
            matches += 1
    return min(100, round(matches / len(required_skills) * 100))


def estimate_time_to_ready(match_score: int) -> str:
    if match_score >= 80:
        return '3-6 months'
    if match_score >= 60:
        return '6-12 months'
    if match_score >= 40:
        return '1-2 years'
    return '2-3 years'


def identify_critical_gaps(current_skills: List[str]) -> List[str]:
    owned = [skill.lower() for skill in current_skills]
    missing = [
        skill for skill in CRITICAL_SKILLS
        if not any(skill.lower() in user_skill for user_skill in owned)
    ]
    return missing[:MAX_CRITICAL_GAPS]


def generate_milestones() -> List[CareerMilestone]:
    return [
        {
            'timeframe': '6 months',
            'title': 'Junior Developer',
            'description': 'Entry-level position with mentorship',
            'requiredSkills': ['Basic Programming', 'Problem Solving'],
            'skillsToAcquire': ['Framework Fundamentals', 'Version Control'],
            'averageSalary': '₹3-6 LPA',
            'jobMarketDemand': 'High',
            'projectsSuggestions': ['Personal Portfolio', 'Simple CRUD App'],
            'certifications': ['Google IT Support', 'FreeCodeCamp'],
            'courses': ['The Complete Web Developer Course', 'Data Structures Algorithms'],
        },
        {
            'timeframe': '2 years',
            'title': 'Mid-Level Developer',
            'description': 'Independent contributor with project ownership',
            'requiredSkills': ['Advanced Framework Knowledge', 'Database Design'],
            'skillsToAcquire': ['System Design', 'Performance Optimization'],
            'averageSalary': '₹8-15 LPA',
            'jobMarketDemand': 'Very High',
            'projectsSuggestions': ['E-commerce Platform', 'Real-time Chat App'],
            'certifications': ['AWS Solutions Architect', 'Google Cloud Professional'],
            'courses': ['System Design Interview', 'Advanced React Patterns'],
        },
    ]


def generate_sample_career_paths(profile: SimulationProfile) -> List[SimulatedCareerPath]:
    skills = profile.get('skills', [])
    paths: List[SimulatedCareerPath] = []
    for path_id, title, description, required, growth, demand, starting, mid_career in SAMPLE_PATHS:
        match_score = calculate_match_score(skills, required)
        paths.append({
            'id': path_id,
            'title': title,
            'description': description,
            'matchScore': match_score,
            'growthPotential': growth,
            'industryDemand': demand,
            'averageStartingSalary': starting,
            'averageMidCareerSalary': mid_career,
            'keyCompanies': list(KEY_COMPANIES),
            'milestones': generate_milestones(),
            'totalSkillGap': max(0, 100 - match_score),
            'estimatedTimeToReady': estimate_time_to_ready(match_score),
            'alternativePaths': list(ALTERNATIVE_PATHS),
            'emergingOpportunities': list(EMERGING_OPPORTUNITIES),
        })
    return paths


def build_fallback_simulation(profile: SimulationProfile) -> SimulationResult:
    """Deterministic simulation used when the LLM reply holds no usable JSON."""
    return {
        'recommendedPaths': generate_sample_career_paths(profile),
        'skillGapAnalysis': {
            'criticalGaps': identify_critical_gaps(profile.get('skills', [])),
            'quickWins': ['Communication Skills', 'Basic Programming', 'Project Management'],
            'longTermSkills': ['AI/ML Expertise', 'System Design', 'Leadership'],
        },
        'marketInsights': {
            'trendingSkills': ['Generative AI', 'Cloud Computing', 'Data Science', 'Cybersecurity'],
            'decliningSkills': ['Legacy Systems', 'Manual Testing'],
            'emergingRoles': ['AI Prompt Engineer', 'Sustainability Consultant', 'Remote Work Facilitator'],
            'industryGrowth': {
                'Technology': 'Very High',
                'Healthcare': 'High',
                'FinTech': 'High',
                'EdTech': 'Medium',
            },
        },
        'personalizedRecommendations': {
            'immediateActions': [
                'Update LinkedIn profile with current skills',
                'Start a personal project portfolio',
                'Join relevant professional communities',
            ],
            'shortTermGoals': [
                'Complete 2-3 online certifications',
                'Build 1-2 substantial projects',
                'Network with industry professionals',
            ],
            'longTermStrategy': [
                'Specialize in emerging technologies',
                'Develop leadership and soft skills',
                'Build a strong professional brand',
            ],
        },
    }


def simulate_career_paths(profile: SimulationProfile, llm: LLMClient) -> Dict[str, Any]:
    """
    Simulate career paths for a profile.

    Args:
        profile: Student profile (skills, interests, experience, education, location, ...)
        llm: LLM client instance

    Returns:
        The LLM's JSON object, or a deterministic simulation when none can be parsed

    Raises:
        UpstreamError: If the LLM call fails
    """
    logger.info(f"Simulating career paths for profile with {len(profile.get('skills', []))} skills")

    try:
        text = llm.chat(SYSTEM_PROMPT, build_simulation_prompt(profile))
    except Exception as e:
        logger.error(f"Career simulation error: {str(e)}")
        raise UpstreamError("llm", "Failed to simulate career paths", e) from e

    parsed = extract_json_object(text)
    if parsed is None:
        logger.warning("Career simulation response had no parseable JSON, using sample career paths")
        return build_fallback_simulation(profile)

    logger.info(f"Career simulation returned {len(parsed.get('recommendedPaths') or [])} paths")
    return parsed
