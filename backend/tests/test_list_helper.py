from bloglist.models import Blog
from bloglist.utils.list_helper import favourite_blog, total_likes

BLOGS = [
    {"title": "React patterns", "author": "Michael Chan", "url": "https://reactpatterns.com/", "likes": 7},
    {"title": "Go To Statement Considered Harmful", "author": "Edsger W. Dijkstra", "url": "http://www.u.arizona.edu/~rubinson/copyright_violations/Go_To_Considered_Harmful.html", "likes": 5},
    {"title": "Canonical string reduction", "author": "Edsger W. Dijkstra", "url": "http://www.cs.utexas.edu/~EWD/transcriptions/EWD08xx/EWD808.html", "likes": 12},
    {"title": "First class tests", "author": "Robert C. Martin", "url": "http://blog.cleancoder.com/uncle-bob/2017/05/05/TestDefinitions.htmll", "likes": 10},
]


def test_total_likes_of_empty_list_is_zero():
    assert total_likes([]) == 0


def test_total_likes_of_single_blog():
    assert total_likes(BLOGS[:1]) == 7


def test_total_likes_of_bigger_list():
    assert total_likes(BLOGS) == 34


def test_favourite_blog_of_empty_list_is_none():
    assert favourite_blog([]) is None


def test_favourite_blog_has_most_likes():
    assert favourite_blog(BLOGS)["title"] == "Canonical string reduction"


def test_favourite_blog_tie_keeps_first():
    tied = [{"title": "a", "likes": 3}, {"title": "b", "likes": 3}]
    assert favourite_blog(tied)["title"] == "a"


def test_helpers_accept_models():
    blogs = [Blog(title="x", url="u", likes=2, user_id=1), Blog(title="y", url="v", user_id=1)]
    assert total_likes(blogs) == 2
    assert favourite_blog(blogs).title == "x"
