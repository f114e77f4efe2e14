"""Output shapes: everything that leaves the API goes through one of these."""

from whattowatch.api.shaping import Shape, ShapeField, as_enum_value, as_iso, as_str

USER_RESPONSE = Shape("UserResponse", {
    "id": ShapeField(transform=as_str),
    "email": ShapeField(),
    "name": ShapeField(),
    "avatarPath": ShapeField(source="avatar_path"),
})

LOGGED_USER_RESPONSE = Shape("LoggedUserResponse", {
    "token": ShapeField(),
    "email": ShapeField(),
    "name": ShapeField(),
    "avatarPath": ShapeField(source="avatar_path"),
})

FILM_RESPONSE = Shape("FilmResponse", {
    "id": ShapeField(transform=as_str),
    "name": ShapeField(),
    "publicationDate": ShapeField(source="created_at", transform=as_iso),
    "genre": ShapeField(transform=as_enum_value),
    "previewVideoLink": ShapeField(source="preview_video_link"),
    "user": ShapeField(shape=USER_RESPONSE),
    "posterImage": ShapeField(source="poster_image"),
    "commentAmount": ShapeField(source="comment_amount", default=0),
    "isFavorite": ShapeField(default=False),
})

FILM_DETAIL_RESPONSE = Shape("FilmDetailResponse", {
    "id": ShapeField(transform=as_str),
    "name": ShapeField(),
    "description": ShapeField(),
    "publicationDate": ShapeField(source="created_at", transform=as_iso),
    "genre": ShapeField(transform=as_enum_value),
    "released": ShapeField(),
    "rating": ShapeField(),
    "previewVideoLink": ShapeField(source="preview_video_link"),
    "videoLink": ShapeField(source="video_link"),
    "actors": ShapeField(default=[]),
    "producer": ShapeField(),
    "runTime": ShapeField(source="run_time"),
    "commentAmount": ShapeField(source="comment_amount", default=0),
    "user": ShapeField(shape=USER_RESPONSE),
    "posterImage": ShapeField(source="poster_image"),
    "backgroundImage": ShapeField(source="background_image"),
    "color": ShapeField(),
    "isFavorite": ShapeField(default=False),
})

COMMENT_RESPONSE = Shape("CommentResponse", {
    "id": ShapeField(transform=as_str),
    "text": ShapeField(),
    "rating": ShapeField(),
    "publicationDate": ShapeField(source="created_at", transform=as_iso),
    "user": ShapeField(shape=USER_RESPONSE),
})
