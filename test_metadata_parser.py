#!/usr/bin/env python3
"""Unit tests for metadata retrieval and XML conversion."""

import os
import tempfile
import unittest
from unittest.mock import MagicMock, patch
import requests

from odata_tsgen_lib import MetadataParser, Translator, metadata_url_for

TRIPPIN_METADATA = b"""<?xml version="1.0" encoding="utf-8"?>
<edmx:Edmx Version="4.0" xmlns:edmx="http://docs.oasis-open.org/odata/ns/edmx">
  <edmx:DataServices>
    <Schema Namespace="Trippin" xmlns="http://docs.oasis-open.org/odata/ns/edm">
      <!-- People service -->
      <EntityType Name="Person">
        <Key>
          <PropertyRef Name="UserName" />
        </Key>
        <Property Name="UserName" Type="Edm.String" Nullable="false" />
        <Property Name="Emails" Type="Collection(Edm.String)" />
        <Property Name="Gender" Type="Trippin.PersonGender" Nullable="false" />
        <NavigationProperty Name="Friends" Type="Collection(Trippin.Person)" />
        <NavigationProperty Name="BestFriend" Type="Trippin.Person" Nullable="false">
          <ReferentialConstraint Property="BestFriendName" ReferencedProperty="UserName" />
        </NavigationProperty>
      </EntityType>
      <ComplexType Name="Location">
        <Property Name="Address" Type="Edm.String" />
        <Property Name="Point" Type="Edm.GeographyPoint" />
      </ComplexType>
      <EnumType Name="PersonGender">
        <Member Name="Male" Value="0" />
        <Member Name="Female" Value="1" />
        <Member Name="Unknown" Value="2" />
      </EnumType>
    </Schema>
  </edmx:DataServices>
</edmx:Edmx>
"""


class TestMetadataUrl(unittest.TestCase):
    """Test service URL normalization."""

    def test_plain_service_url(self):
        self.assertEqual(metadata_url_for("http://host/service.svc"), "http://host/service.svc/$metadata")

    def test_trailing_slash(self):
        self.assertEqual(metadata_url_for("http://host/service.svc/"), "http://host/service.svc/$metadata")

    def test_metadata_already_present(self):
        self.assertEqual(metadata_url_for("http://host/service.svc/$metadata"), "http://host/service.svc/$metadata")


class TestParseXml(unittest.TestCase):
    """Test conversion of metadata XML into the parsed mapping."""

    def setUp(self):
        self.data = MetadataParser.parse_xml(TRIPPIN_METADATA)

    def test_root_shape(self):
        edmx = self.data["edmx:Edmx"]
        self.assertEqual(edmx["$"]["Version"], "4.0")
        self.assertEqual(edmx["$"]["xmlns:edmx"], "http://docs.oasis-open.org/odata/ns/edmx")
        self.assertIsInstance(edmx["edmx:DataServices"], list)

    def test_schema_shape(self):
        schema = self.data["edmx:Edmx"]["edmx:DataServices"][0]["Schema"][0]
        self.assertEqual(schema["$"]["Namespace"], "Trippin")
        self.assertEqual(schema["$"]["xmlns"], "http://docs.oasis-open.org/odata/ns/edm")
        person = schema["EntityType"][0]
        self.assertEqual([p["$"]["Name"] for p in person["Property"]], ["UserName", "Emails", "Gender"])
        self.assertEqual(person["Property"][0]["$"]["Nullable"], "false")
        self.assertEqual(person["Key"][0]["PropertyRef"][0]["$"]["Name"], "UserName")
        constraint = person["NavigationProperty"][1]["ReferentialConstraint"][0]
        self.assertEqual(constraint["$"]["ReferencedProperty"], "UserName")

    def test_translate_parsed_document(self):
        output = Translator().translate(self.data)
        self.assertIn(
            "namespace Trippin {\n"
            "export interface Person {\n"
            "UserName: Edm.String;\n"
            "Emails?: Edm.String[];\n"
            "Gender: Trippin.PersonGender;\n"
            "Friends?: Trippin.Person[];\n"
            "BestFriend?: Trippin.Person;\n"
            "}\n"
            "export interface Location {\n"
            "Address?: Edm.String;\n"
            "Point?: Edm.GeographyPoint;\n"
            "}\n"
            "export enum PersonGender {\n"
            "Male = 0,Female = 1,Unknown = 2}\n"
            "}\n",
            output
        )
        self.assertTrue(output.endswith("export type GeographyPoint = any;\n}"))

    def test_load_file(self):
        with tempfile.NamedTemporaryFile(mode='wb', delete=False, suffix='.xml') as f:
            f.write(TRIPPIN_METADATA)
            temp_file = f.name
        try:
            self.assertEqual(MetadataParser.load_file(temp_file), self.data)
        finally:
            os.unlink(temp_file)


class TestFetch(unittest.TestCase):
    """Test metadata retrieval with mocked HTTP responses."""

    @patch('requests.Session.get')
    def test_fetch_success(self, mock_get):
        mock_response = MagicMock()
        mock_response.status_code = 200
        mock_response.content = TRIPPIN_METADATA
        mock_get.return_value = mock_response

        parser = MetadataParser("http://host/trippin/", auth=("user", "secret"))
        data = parser.fetch()

        mock_get.assert_called_once_with("http://host/trippin/$metadata")
        self.assertEqual(parser.session.auth, ("user", "secret"))
        self.assertIn("edmx:Edmx", data)

    def test_cookie_auth(self):
        parser = MetadataParser("http://host/trippin", auth={"session": "abc123"})
        self.assertEqual(parser.session.cookies.get("session"), "abc123")

    @patch('requests.Session.get')
    def test_fetch_http_error(self, mock_get):
        error_response = MagicMock()
        error_response.status_code = 401
        mock_response = MagicMock()
        mock_response.raise_for_status.side_effect = requests.exceptions.HTTPError("401 Unauthorized", response=error_response)
        mock_get.return_value = mock_response

        with patch('sys.stderr'):
            with self.assertRaises(requests.exceptions.HTTPError):
                MetadataParser("http://host/trippin").fetch()


if __name__ == "__main__":
    unittest.main()
