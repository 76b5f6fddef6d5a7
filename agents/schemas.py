"""Data models/schemas for the career advisor.

Keys follow the JSON wire names used by the HTTP layer.
"""
from typing import TypedDict, List, Optional, Dict, Any


class _RequiredProfileFields(TypedDict):
    currentSkills: List[str]
    targetRole: str


class SkillsPredictionInput(_RequiredProfileFields, total=False):
    """User profile submitted to the skills radar. Only skills and role are required."""
    experience: str  # e.g. "Entry-level", "Mid-level", "Senior", "Lead"
    industry: str
    location: str


class SalaryRange(TypedDict):
    min: int
    max: int
    currency: str


class JobPosting(TypedDict):
    """Job posting derived from a jobs-search result."""
    title: str
    company: str
    location: str
    salaryRange: Optional[SalaryRange]
    skills: List[str]
    experienceLevel: str  # "Entry", "Mid" or "Senior"
    postedDate: str


class TrendData(TypedDict):
    """Trend Collector output."""
    trendingTechs: List[str]
    relevantResults: List[Dict[str, Any]]
    skillDemand: Dict[str, int]  # user skill -> weighted mention count
    techFrequency: Dict[str, int]  # every vocabulary term seen -> weighted mention count


class JobMarketData(TypedDict):
    """Job-Market Collector output."""
    jobPostings: List[JobPosting]
    avgSalary: float
    skillDemand: Dict[str, int]
    locationData: Dict[str, float]


class Video(TypedDict):
    title: str
    channelTitle: str
    videoId: str
    thumbnail: str
    duration: str
    viewCount: int
    description: str
    publishedAt: str


class SkillVideos(TypedDict):
    skill: str
    videos: List[Video]


class LearningResourceSummary(TypedDict):
    skill: str
    videoCount: int
    totalViews: int
    difficultyScore: int
    popularChannels: List[str]


class LearningData(TypedDict):
    """Learning-Resource Collector output."""
    learningResources: List[LearningResourceSummary]
    skillDifficulty: Dict[str, int]
    recommendedVideos: List[SkillVideos]


class MarketTrend(TypedDict):
    skill: str
    demand_score: float  # 0-100
    avg_salary_inr: int
    job_count: int
    growth_rate: int
    locations: List[str]


class SkillGap(TypedDict):
    skill: str
    importance: int  # 1-10
    currentDemand: int
    avgSalaryIncrease: int  # INR
    learningPath: List[str]
    timeToLearn: str


class CareerPath(TypedDict):
    nextRole: str
    timeline: str
    requiredSkills: List[str]
    expectedSalary: int


class SalaryPrediction(TypedDict):
    current: int
    withNewSkills: int
    currency: str  # always "INR"
    location: str


class MarketInsights(TypedDict):
    trendingTechnologies: List[str]
    highDemandSkills: List[str]
    emergingFields: List[str]


class Course(TypedDict):
    title: str
    provider: str
    url: str
    duration: str
    level: str
    price: str


class SkillCourses(TypedDict):
    skill: str
    courses: List[Course]


class LearningPlatform(TypedDict):
    name: str
    url: str
    description: str
    specialization: List[str]


class LearningRoadmap(TypedDict):
    recommendedCourses: List[SkillCourses]
    youtubeVideos: List[SkillVideos]
    learningPlatforms: List[LearningPlatform]


class RealDataSources(TypedDict):
    """Provenance counts shown by the UI."""
    googleSearchResults: int
    jobPostings: int
    youtubeResources: int
    marketDataPoints: int
    lastUpdated: str


class SkillsPredictionOutput(TypedDict):
    """Top-level skills radar report."""
    skillGaps: List[SkillGap]
    salaryPrediction: SalaryPrediction
    marketInsights: MarketInsights
    careerPath: CareerPath
    learningRoadmap: LearningRoadmap
    realDataSources: RealDataSources


class AnalysisResult(TypedDict, total=False):
    """LLM Analyzer output (parsed JSON or deterministic fallback)."""
    skillGaps: List[Dict[str, Any]]
    careerPath: Dict[str, Any]
    insights: Dict[str, Any]


# Career simulator

class SimulationProfile(TypedDict, total=False):
    skills: List[str]
    interests: List[str]
    experience: str
    education: str
    location: str
    preferredIndustries: List[str]
    careerGoals: str
    timeHorizon: str  # "1-year", "3-year", "5-year" or "10-year"


class CareerMilestone(TypedDict):
    timeframe: str
    title: str
    description: str
    requiredSkills: List[str]
    skillsToAcquire: List[str]
    averageSalary: str
    jobMarketDemand: str
    projectsSuggestions: List[str]
    certifications: List[str]
    courses: List[str]


class SimulatedCareerPath(TypedDict):
    id: str
    title: str
    description: str
    matchScore: int
    growthPotential: str
    industryDemand: str
    averageStartingSalary: str
    averageMidCareerSalary: str
    keyCompanies: List[str]
    milestones: List[CareerMilestone]
    totalSkillGap: int
    estimatedTimeToReady: str
    alternativePaths: List[str]
    emergingOpportunities: List[str]


class SimulationResult(TypedDict):
    recommendedPaths: List[Dict[str, Any]]
    skillGapAnalysis: Dict[str, List[str]]
    marketInsights: Dict[str, Any]
    personalizedRecommendations: Dict[str, List[str]]


# Resume scoring

class SectionScore(TypedDict, total=False):
    score: int
    feedback: List[str]
    improvements: List[str]
    matchedKeywords: List[str]
    missingKeywords: List[str]


class ExtractedResumeData(TypedDict):
    personalInfo: Dict[str, Any]
    skills: List[str]
    experience: List[Dict[str, Any]]
    education: List[Dict[str, Any]]
    certifications: List[str]


class DetailedAnalysis(TypedDict):
    strengths: List[str]
    weaknesses: List[str]
    recommendations: List[str]
    industryComparison: str


class ResumeAnalysisResult(TypedDict):
    overallScore: int
    sections: Dict[str, SectionScore]
    detailedAnalysis: DetailedAnalysis
    extractedData: ExtractedResumeData
