"""Request helpers shared by the acceptance tests."""


def create_station(client, name):
    response = client.post("/stations", json={"name": name})
    assert response.status_code == 201, response.text
    return response.json()


def line_request(name, color, up_station, down_station, distance):
    return {
        "name": name,
        "color": color,
        "upStationId": up_station["id"],
        "downStationId": down_station["id"],
        "distance": distance,
    }


def create_line(client, request):
    return client.post("/lines", json=request)


def id_from_location(response):
    return int(response.headers["Location"].split("/")[-1])


def station_ids(line):
    return [station["id"] for station in line["stations"]]
