from commentfeed.controllers.comments_feed_controller import CommentsFeedController

__all__ = ["CommentsFeedController"]
