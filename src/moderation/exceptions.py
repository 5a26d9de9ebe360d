"""Domain errors for the Moderation context.

Three families, each mapped to an HTTP status by the API layer:

* ``NotFound``  (404) — entity absent or soft-deleted
* ``Forbidden`` (403) — actor lacks rights over the target entity
* ``Duplicate`` (409) — uniqueness violation (review, dispute, vote)

Malformed payloads raise Protean's ``ValidationError`` (400). Failures of
notification and e-mail collaborators never surface as exceptions.
"""

from protean.exceptions import InvalidOperationError, ObjectNotFoundError


class NotFound(ObjectNotFoundError):
    code = "NOT_FOUND"

    def __init__(self, message):
        super().__init__({"_entity": [message]})
        self.message = message

    def __str__(self):
        return self.message


class ReviewNotFound(NotFound):
    code = "REVIEW_NOT_FOUND"


class ProductNotFound(NotFound):
    code = "PRODUCT_NOT_FOUND"


class DisputeNotFound(NotFound):
    code = "DISPUTE_NOT_FOUND"


class ExplanationNotFound(NotFound):
    code = "EXPLANATION_NOT_FOUND"


class VoteNotFound(NotFound):
    code = "VOTE_NOT_FOUND"


class Forbidden(InvalidOperationError):
    code = "FORBIDDEN"

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class NotReviewAuthor(Forbidden):
    code = "NOT_REVIEW_AUTHOR"


class NotProductOwner(Forbidden):
    code = "NOT_PRODUCT_OWNER"


class NotDisputeParticipant(Forbidden):
    code = "UNAUTHORIZED"


class NotExplanationAuthor(Forbidden):
    code = "UNAUTHORIZED"


class Duplicate(InvalidOperationError):
    code = "DUPLICATE"

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class DuplicateReview(Duplicate):
    code = "DUPLICATE_REVIEW"


class DuplicateDispute(Duplicate):
    code = "DISPUTE_ALREADY_EXISTS"


class AlreadyVoted(Duplicate):
    code = "ALREADY_VOTED"
