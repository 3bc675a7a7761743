"""GraphQL test fixtures.

Provides:
- GraphQL context bound to the test session with a fresh loader set
- Query and mutation documents shared by the GraphQL tests
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from social_service.features.graphql.context import GraphQLContext

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


@pytest.fixture
def graphql_context(db_session: AsyncSession) -> GraphQLContext:
    """Create GraphQL context for testing.

    Note: This is a synchronous fixture because GraphQLContext is a dataclass.
    Each test gets its own loaders, as each HTTP request would.
    """
    return GraphQLContext.for_session(db_session)


@pytest.fixture
def new_context(db_session: AsyncSession):
    """Factory for additional contexts, one per simulated request."""

    def factory(max_batch_size: int | None = None) -> GraphQLContext:
        return GraphQLContext.for_session(db_session, max_batch_size=max_batch_size)

    return factory


# ============================================================================
# Queries
# ============================================================================

MEMBER_TYPES_QUERY = """
    query {
        memberTypes {
            id
            discount
            postsLimitPerMonth
        }
    }
"""

MEMBER_TYPE_QUERY = """
    query GetMemberType($id: MemberTypeId!) {
        memberType(id: $id) {
            id
            discount
            postsLimitPerMonth
        }
    }
"""

USERS_QUERY = """
    query {
        users {
            id
            name
            balance
        }
    }
"""

USER_QUERY = """
    query GetUser($id: UUID!) {
        user(id: $id) {
            id
            name
            balance
        }
    }
"""

USER_WITH_RELATIONS_QUERY = """
    query GetUserWithRelations($id: UUID!) {
        user(id: $id) {
            id
            profile {
                yearOfBirth
                memberType {
                    id
                }
            }
            posts {
                title
            }
            userSubscribedTo {
                name
            }
            subscribedToUser {
                name
            }
        }
    }
"""

USERS_WITH_POSTS_QUERY = """
    query {
        users {
            id
            posts {
                title
            }
        }
    }
"""

USERS_WITH_PROFILES_QUERY = """
    query {
        users {
            id
            profile {
                id
                memberType {
                    id
                    discount
                }
            }
        }
    }
"""

USERS_WITH_SUBSCRIPTIONS_QUERY = """
    query {
        users {
            name
            userSubscribedTo {
                name
            }
            subscribedToUser {
                name
            }
        }
    }
"""

USERS_WITH_AUTHOR_PROFILES_QUERY = """
    query {
        users {
            name
            posts {
                title
            }
            userSubscribedTo {
                name
                profile {
                    id
                }
            }
        }
    }
"""

POSTS_QUERY = """
    query {
        posts {
            id
            title
            content
            authorId
        }
    }
"""

POST_QUERY = """
    query GetPost($id: UUID!) {
        post(id: $id) {
            id
            title
            content
            authorId
        }
    }
"""

PROFILES_QUERY = """
    query {
        profiles {
            id
            isMale
            yearOfBirth
            userId
            memberTypeId
            memberType {
                id
            }
        }
    }
"""

PROFILE_QUERY = """
    query GetProfile($id: UUID!) {
        profile(id: $id) {
            id
            userId
            memberType {
                id
                postsLimitPerMonth
            }
        }
    }
"""

# users > userSubscribedTo > subscribedToUser > userSubscribedTo > subscribedToUser > posts
TOO_DEEP_QUERY = """
    query TooDeep {
        users {
            userSubscribedTo {
                subscribedToUser {
                    userSubscribedTo {
                        subscribedToUser {
                            posts {
                                id
                            }
                        }
                    }
                }
            }
        }
    }
"""

# Same nesting minus the innermost relation: depth 5
DEEPEST_ALLOWED_QUERY = """
    query DeepestAllowed {
        users {
            userSubscribedTo {
                subscribedToUser {
                    userSubscribedTo {
                        subscribedToUser {
                            id
                        }
                    }
                }
            }
        }
    }
"""

# ============================================================================
# Mutations
# ============================================================================

CREATE_USER_MUTATION = """
    mutation CreateUser($dto: CreateUserInput!) {
        createUser(dto: $dto) {
            id
            name
            balance
        }
    }
"""

CHANGE_USER_MUTATION = """
    mutation ChangeUser($id: UUID!, $dto: ChangeUserInput!) {
        changeUser(id: $id, dto: $dto) {
            id
            name
            balance
        }
    }
"""

DELETE_USER_MUTATION = """
    mutation DeleteUser($id: UUID!) {
        deleteUser(id: $id)
    }
"""

CREATE_PROFILE_MUTATION = """
    mutation CreateProfile($dto: CreateProfileInput!) {
        createProfile(dto: $dto) {
            id
            userId
            memberTypeId
            memberType {
                discount
            }
        }
    }
"""

CHANGE_PROFILE_MUTATION = """
    mutation ChangeProfile($id: UUID!, $dto: ChangeProfileInput!) {
        changeProfile(id: $id, dto: $dto) {
            id
            isMale
            yearOfBirth
            memberTypeId
        }
    }
"""

DELETE_PROFILE_MUTATION = """
    mutation DeleteProfile($id: UUID!) {
        deleteProfile(id: $id)
    }
"""

CREATE_POST_MUTATION = """
    mutation CreatePost($dto: CreatePostInput!) {
        createPost(dto: $dto) {
            id
            title
            content
            authorId
        }
    }
"""

CHANGE_POST_MUTATION = """
    mutation ChangePost($id: UUID!, $dto: ChangePostInput!) {
        changePost(id: $id, dto: $dto) {
            id
            title
            content
        }
    }
"""

DELETE_POST_MUTATION = """
    mutation DeletePost($id: UUID!) {
        deletePost(id: $id)
    }
"""

SUBSCRIBE_TO_MUTATION = """
    mutation SubscribeTo($userId: UUID!, $authorId: UUID!) {
        subscribeTo(userId: $userId, authorId: $authorId)
    }
"""

UNSUBSCRIBE_FROM_MUTATION = """
    mutation UnsubscribeFrom($userId: UUID!, $authorId: UUID!) {
        unsubscribeFrom(userId: $userId, authorId: $authorId)
    }
"""
