"""
URL configuration for django-blog-engine.

Include in your project urls.py:

    path('api/', include('blog_engine.urls')),
    handler404 = 'blog_engine.views.page_not_found'
    handler500 = 'blog_engine.views.server_error'
"""
from django.urls import path

from . import views

app_name = "blog_engine"

urlpatterns = [
    path("", views.api_root, name="api_root"),

    # Accounts
    path("auth/register", views.RegisterView.as_view(), name="register"),
    path("auth/login", views.LoginView.as_view(), name="login"),
    path("auth/me", views.MeView.as_view(), name="me"),
    path("auth/updatedetails", views.UpdateDetailsView.as_view(), name="update_details"),
    path("auth/updatepassword", views.UpdatePasswordView.as_view(), name="update_password"),

    # Posts
    path("posts", views.PostListView.as_view(), name="post_list"),
    path("posts/<int:pk>", views.PostDetailView.as_view(), name="post_detail"),
    path("posts/<int:pk>/like", views.PostLikeView.as_view(), name="post_like"),
    path("posts/category/<int:pk>", views.CategoryPostListView.as_view(), name="category_posts"),

    # Categories and tags
    path("categories", views.CategoryListView.as_view(), name="category_list"),
    path("categories/<int:pk>", views.CategoryDetailView.as_view(), name="category_detail"),
    path("tags", views.TagListView.as_view(), name="tag_list"),
    path("tags/<int:pk>", views.TagDetailView.as_view(), name="tag_detail"),
]
