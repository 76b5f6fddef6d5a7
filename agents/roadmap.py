"""Roadmap Assembler: courses, videos and platforms for each skill gap."""
from typing import Any, Dict, List
from urllib.parse import quote
from agents.schemas import Course, LearningData, LearningPlatform, LearningRoadmap, SkillCourses


def _course(title: str, provider: str, url: str, duration: str, level: str, price: str) -> Course:
    return {
        'title': title,
        'provider': provider,
        'url': url,
        'duration': duration,
        'level': level,
        'price': price,
    }


COURSE_DATABASE: Dict[str, List[Course]] = {
    'JavaScript': [
        _course('The Complete JavaScript Course 2024', 'Udemy',
                'https://www.udemy.com/course/the-complete-javascript-course/',
                '69 hours', 'Beginner to Advanced', 'Paid'),
        _course('JavaScript Algorithms and Data Structures', 'freeCodeCamp',
                'https://www.freecodecamp.org/learn/javascript-algorithms-and-data-structures/',
                '300 hours', 'Intermediate', 'Free'),
        _course('Modern JavaScript From The Beginning', 'Udemy',
                'https://www.udemy.com/course/modern-javascript-from-the-beginning/',
                '37 hours', 'Beginner', 'Paid'),
    ],
    'Python': [
        _course('Python for Everybody Specialization', 'Coursera',
                'https://www.coursera.org/specializations/python',
                '8 months', 'Beginner', 'Free/Paid Certificate'),
        _course('Complete Python Bootcamp', 'Udemy',
                'https://www.udemy.com/course/complete-python-bootcamp/',
                '22 hours', 'Beginner to Advanced', 'Paid'),
        _course('Scientific Computing with Python', 'freeCodeCamp',
                'https://www.freecodecamp.org/learn/scientific-computing-with-python/',
                '300 hours', 'Intermediate', 'Free'),
    ],
    'React': [
        _course('React - The Complete Guide', 'Udemy',
                'https://www.udemy.com/course/react-the-complete-guide-incl-redux/',
                '48 hours', 'Beginner to Advanced', 'Paid'),
        _course('Front End Development Libraries', 'freeCodeCamp',
                'https://www.freecodecamp.org/learn/front-end-development-libraries/',
                '300 hours', 'Intermediate', 'Free'),
        _course('React Specialization', 'Coursera',
                'https://www.coursera.org/specializations/react',
                '6 months', 'Intermediate', 'Free/Paid Certificate'),
    ],
    'Machine Learning': [
        _course('Machine Learning Course', 'Coursera',
                'https://www.coursera.org/learn/machine-learning',
                '11 weeks', 'Intermediate', 'Free/Paid Certificate'),
        _course('Machine Learning A-Z', 'Udemy',
                'https://www.udemy.com/course/machinelearning/',
                '44 hours', 'Beginner to Advanced', 'Paid'),
        _course('Machine Learning with Python', 'freeCodeCamp',
                'https://www.freecodecamp.org/learn/machine-learning-with-python/',
                '300 hours', 'Advanced', 'Free'),
    ],
    'Node.js': [
        _course('The Complete Node.js Developer Course', 'Udemy',
                'https://www.udemy.com/course/the-complete-nodejs-developer-course-2/',
                '35 hours', 'Beginner to Advanced', 'Paid'),
        _course('APIs and Microservices', 'freeCodeCamp',
                'https://www.freecodecamp.org/learn/apis-and-microservices/',
                '300 hours', 'Intermediate', 'Free'),
    ],
}

LEARNING_PLATFORMS: List[LearningPlatform] = [
    {
        'name': 'freeCodeCamp',
        'url': 'https://www.freecodecamp.org',
        'description': 'Free coding bootcamp with hands-on projects',
        'specialization': ['Web Development', 'JavaScript', 'Python', 'Data Science'],
    },
    {
        'name': 'Coursera',
        'url': 'https://www.coursera.org',
        'description': 'University-level courses from top institutions',
        'specialization': ['Machine Learning', 'Data Science', 'Cloud Computing', 'AI'],
    },
    {
        'name': 'Udemy',
        'url': 'https://www.udemy.com',
        'description': 'Practical courses for all skill levels',
        'specialization': ['Programming', 'Web Development', 'Mobile Development', 'DevOps'],
    },
    {
        'name': 'Pluralsight',
        'url': 'https://www.pluralsight.com',
        'description': 'Technology skills platform for professionals',
        'specialization': ['Cloud Platforms', 'Software Development', 'IT Operations', 'Security'],
    },
    {
        'name': 'edX',
        'url': 'https://www.edx.org',
        'description': 'University-level courses and certifications',
        'specialization': ['Computer Science', 'AI', 'Data Analysis', 'Engineering'],
    },
    {
        'name': 'Codecademy',
        'url': 'https://www.codecademy.com',
        'description': 'Interactive coding lessons and projects',
        'specialization': ['Programming Languages', 'Web Development', 'Data Science', 'Computer Science'],
    },
]


def generic_courses(skill: str) -> List[Course]:
    """Search-link placeholders for skills missing from the course table."""
    return [
        _course(f"Complete {skill} Course", 'Udemy',
                f"https://www.udemy.com/courses/search/?q={quote(skill, safe='')}",
                '20-40 hours', 'All Levels', 'Paid'),
        _course(f"{skill} Documentation & Tutorials", 'Official Docs',
                f"https://www.google.com/search?q={quote(skill + ' official documentation', safe='')}",
                'Self-paced', 'All Levels', 'Free'),
        _course(f"{skill} Free Course", 'freeCodeCamp',
                f"https://www.youtube.com/results?search_query={quote(skill + ' freeCodeCamp', safe='')}",
                'Varies', 'Beginner to Advanced', 'Free'),
    ]


def recommend_courses(skill: str) -> List[Course]:
    skill_lower = skill.strip().lower()
    for known_skill, courses in COURSE_DATABASE.items():
        if known_skill.lower() == skill_lower:
            return [dict(course) for course in courses]
    return generic_courses(skill.strip())


def generate_learning_roadmap(skill_gaps: List[Dict[str, Any]], learning_data: LearningData) -> LearningRoadmap:
    """Assemble courses per skill gap with the collected videos and the static platform list."""
    recommended_courses: List[SkillCourses] = [
        {'skill': gap['skill'], 'courses': recommend_courses(gap['skill'])}
        for gap in skill_gaps
    ]
    return {
        'recommendedCourses': recommended_courses,
        'youtubeVideos': list(learning_data.get('recommendedVideos', [])),
        'learningPlatforms': [dict(platform) for platform in LEARNING_PLATFORMS],
    }
