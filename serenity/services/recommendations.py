"""Static stress-relief recommendation cards for the home screen."""

from serenity.models.schemas import Recommendation

TITLES = ["Haz ejercicio", "Medita", "Lee", "Camina", "Desconéctate"]

PLACEHOLDER_IMAGE = "https://via.placeholder.com/50"

LINKS = {
    "haz ejercicio": "https://www.mayoclinic.org/es/healthy-lifestyle/stress-management/in-depth/exercise-and-stress/art-20044469",
    "medita": "https://www.mayoclinic.org/es/tests-procedures/meditation/in-depth/meditation/art-20045858",
    "lee": "https://theconversation.com/leer-para-que-215277",
    "camina": "https://www.mayoclinic.org/es/healthy-lifestyle/fitness/in-depth/walking/art-20046261",
    "desconéctate": "https://www.generali.es/blog/generalimasqueseguros/desconectar-tecnologia/",
}

IMAGES = {
    "haz ejercicio": "https://uvn-brightspot.s3.amazonaws.com/assets/vixes/imj/vivirsalud/H/Hacer-ejercicio-mejora-la-memoria-2.jpg",
    "medita": "https://static.sadhguru.org/d/46272/1633197086-1633197085450.jpg",
    "lee": "https://images.unsplash.com/photo-1512820790803-83ca734da794",
    "camina": "https://fundaciondelcorazon.com/images/stories/Andar.jpg",
    "desconéctate": "https://static.wixstatic.com/media/24e8f3_8a310eeb66924818a1737cdf2bed5d95~mv2.png",
}


def recommendation(title: str) -> Recommendation:
    """Card for a title; lookups ignore case, unknown titles get no link."""
    key = title.lower()
    return Recommendation(
        title=title,
        link=LINKS.get(key),
        image_url=IMAGES.get(key, PLACEHOLDER_IMAGE),
    )


def list_recommendations() -> list[Recommendation]:
    return [recommendation(title) for title in TITLES]
