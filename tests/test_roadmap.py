from agents.roadmap import LEARNING_PLATFORMS, generate_learning_roadmap, recommend_courses


def test_known_skill_lookup_is_case_insensitive():
    courses = recommend_courses('python')
    assert len(courses) == 3
    assert courses[0]['title'] == 'Python for Everybody Specialization'
    assert recommend_courses('Node.js')[1]['provider'] == 'freeCodeCamp'


def test_unknown_skill_gets_encoded_search_links():
    courses = recommend_courses('Rust & Go')
    assert [course['title'] for course in courses] == [
        'Complete Rust & Go Course',
        'Rust & Go Documentation & Tutorials',
        'Rust & Go Free Course',
    ]
    assert courses[0]['url'] == 'https://www.udemy.com/courses/search/?q=Rust%20%26%20Go'
    assert courses[1]['url'] == 'https://www.google.com/search?q=Rust%20%26%20Go%20official%20documentation'
    assert courses[2]['url'].endswith('search_query=Rust%20%26%20Go%20freeCodeCamp')


def test_generate_learning_roadmap():
    videos = [{'skill': 'Python', 'videos': [{'title': 'Python in 1 hour'}]}]
    roadmap = generate_learning_roadmap(
        [{'skill': 'React'}, {'skill': 'Terraform'}],
        {'learningResources': [], 'skillDifficulty': {}, 'recommendedVideos': videos},
    )

    assert [entry['skill'] for entry in roadmap['recommendedCourses']] == ['React', 'Terraform']
    assert roadmap['recommendedCourses'][0]['courses'][0]['title'] == 'React - The Complete Guide'
    assert roadmap['youtubeVideos'] == videos
    assert [platform['name'] for platform in roadmap['learningPlatforms']] == [
        'freeCodeCamp', 'Coursera', 'Udemy', 'Pluralsight', 'edX', 'Codecademy',
    ]


def test_roadmap_does_not_share_static_tables():
    roadmap = generate_learning_roadmap([{'skill': 'Python'}], {'recommendedVideos': []})
    roadmap['learningPlatforms'][0]['name'] = 'changed'
    roadmap['recommendedCourses'][0]['courses'][0]['title'] = 'changed'

    assert LEARNING_PLATFORMS[0]['name'] == 'freeCodeCamp'
    assert recommend_courses('Python')[0]['title'] == 'Python for Everybody Specialization'
