import logging
from card.messenger import Message, Messenger, WeatherMessage
from weather.models import Weather


class OtherMessage(Message):
    pass


def test_publish_without_subscribers():
    assert Messenger().publish(WeatherMessage(Weather.ALL)) == 0


def test_publish_reaches_subscribers_of_type():
    messenger = Messenger()
    weather, other = [], []
    messenger.subscribe(WeatherMessage, weather.append)
    messenger.subscribe(WeatherMessage, weather.append)
    messenger.subscribe(OtherMessage, other.append)

    delivered = messenger.publish(WeatherMessage(Weather.SNOW))

    assert delivered == 2
    assert [message.weather for message in weather] == [Weather.SNOW, Weather.SNOW]
    assert other == []


def test_unsubscribe():
    messenger = Messenger()
    received = []
    unsubscribe = messenger.subscribe(WeatherMessage, received.append)
    unsubscribe()
    unsubscribe()
    messenger.publish(WeatherMessage(Weather.RAIN))
    assert received == []


def test_failing_subscriber_does_not_stop_delivery(caplog):
    messenger = Messenger()
    received = []

    def broken(message):
        raise RuntimeError("subscriber failed")

    messenger.subscribe(WeatherMessage, broken)
    messenger.subscribe(WeatherMessage, received.append)

    with caplog.at_level(logging.ERROR):
        assert messenger.publish(WeatherMessage(Weather.CLOUDS)) == 1

    assert len(received) == 1
    assert "subscriber failed" in caplog.text
