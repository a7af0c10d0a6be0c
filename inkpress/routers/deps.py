from fastapi import Depends, Request
from sqlmodel import Session
from inkpress.db.session import get_session
from inkpress.services.blog import BlogService
from inkpress.services.classifier import ClassifierGateway, build_classifier
from inkpress.services.comment import CommentService
from inkpress.services.engagement import LikeService
from inkpress.services.moderation import ModerationService
from inkpress.services.user import UserService

def get_classifier(request: Request) -> ClassifierGateway:
    # Built once in the application lifespan; tests override this dependency
    classifier = getattr(request.app.state, "classifier", None)
    if classifier is None:
        classifier = build_classifier()
        request.app.state.classifier = classifier
    return classifier

def get_blog_service(session: Session = Depends(get_session)) -> BlogService:
    return BlogService(session)

def get_comment_service(session: Session = Depends(get_session)) -> CommentService:
    return CommentService(session)

def get_like_service(session: Session = Depends(get_session)) -> LikeService:
    return LikeService(session)

def get_user_service(session: Session = Depends(get_session)) -> UserService:
    return UserService(session)

def get_moderation_service(
    session: Session = Depends(get_session),
    classifier: ClassifierGateway = Depends(get_classifier),
) -> ModerationService:
    return ModerationService(session, classifier)
