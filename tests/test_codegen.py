"""Tests for the codegen module."""

import pytest

from swaggergen.codegen import generate
from swaggergen.context_builder import build, build_context
from swaggergen.options import GeneratorOptions


class TestGenerate:
    @pytest.fixture(autouse=True)
    def _generate(self, petstore_result, tmp_path):
        self.ctx = build_context(petstore_result)
        self.out = tmp_path / "api"

    def test_writes_all_files(self):
        written = generate(self.ctx, self.out)
        names = {p.relative_to(self.out).as_posix() for p in written}
        assert "models/pet-status.ts" in names
        assert "services/pets.service.ts" in names
        assert {"models.ts", "services.ts", "api.module.ts", "api-configuration.ts"} <= names
        assert len(names) == 9 + 2 + 4

    def test_model_file(self):
        generate(self.ctx, self.out)
        dog = (self.out / "models" / "dog.ts").read_text()
        assert "export interface Dog extends Pet {" in dog
        assert "import { Pet } from './pet';" in dog
        assert "barkVolume: number;" in dog
        assert "bestFriend?: Dog;" in dog

    def test_enum_file(self):
        generate(self.ctx, self.out)
        status = (self.out / "models" / "pet-status.ts").read_text()
        assert "export type PetStatus =" in status
        assert "static readonly PENDING_ADOPTION: PetStatus = 'pendingAdoption';" in status

    def test_service_file(self):
        generate(self.ctx, self.out)
        service = (self.out / "services" / "pets.service.ts").read_text()
        assert "export class PetsService {" in service
        assert "getPet(params: PetsService.GetPetParams): Observable<Pet>" in service
        assert "countPets(): Observable<number>" in service
        assert "`/pets/${params.petId}`" in service
        assert "export interface FindPetsParams {" in service
        assert '__params.set("status", params.status.join(","))' in service
        assert "__params.append(\"status\"" not in service

    def test_root_url(self):
        generate(self.ctx, self.out)
        config = (self.out / "api-configuration.ts").read_text()
        assert 'rootUrl: string = "https://petstore.example.com/api";' in config

    def test_optional_files_disabled(self):
        options = GeneratorOptions(model_index=False, service_index=False, api_module=False)
        generate(self.ctx, self.out, options)
        assert not (self.out / "models.ts").exists()
        assert not (self.out / "services.ts").exists()
        assert not (self.out / "api.module.ts").exists()
        assert (self.out / "api-configuration.ts").exists()

    def test_prints_progress(self, capsys):
        generate(self.ctx, self.out)
        assert "Generated 9 models and 2 services" in capsys.readouterr().out


def _array_param(name, location, collection_format=None):
    param = {"name": name, "in": location, "type": "array", "items": {"type": "string"}}
    if collection_format is not None:
        param["collectionFormat"] = collection_format
    return param


class TestCollectionFormats:
    """Array query and header parameters follow their collectionFormat."""

    @pytest.fixture(autouse=True)
    def _service(self, tmp_path):
        spec = {
            "swagger": "2.0",
            "paths": {"/items": {"get": {
                "tags": ["Items"],
                "operationId": "listItems",
                "parameters": [
                    _array_param("plain", "query"),
                    _array_param("spaced", "query", "ssv"),
                    _array_param("tabbed", "query", "tsv"),
                    _array_param("piped", "query", "pipes"),
                    _array_param("repeated", "query", "multi"),
                    _array_param("ids", "header", "pipes"),
                ],
                "responses": {},
            }}},
        }
        generate(build_context(build(spec)), tmp_path)
        self.service = (tmp_path / "services" / "items.service.ts").read_text()

    def test_default_is_comma(self):
        assert '__params.set("plain", params.plain.join(","))' in self.service

    def test_space_tab_and_pipe(self):
        assert '__params.set("spaced", params.spaced.join(" "))' in self.service
        assert '__params.set("tabbed", params.tabbed.join("\\t"))' in self.service
        assert '__params.set("piped", params.piped.join("|"))' in self.service

    def test_multi_repeats_the_key(self):
        assert '__params.append("repeated", "" + v)' in self.service
        assert "params.repeated.join" not in self.service

    def test_header(self):
        assert '__headers.set("ids", params.ids.join("|"))' in self.service


class TestEnumEscaping:
    def test_quote_in_enum_value(self, tmp_path):
        spec = {
            "swagger": "2.0",
            "definitions": {"Mood": {"type": "string", "enum": ["it's", "fine"]}},
        }
        result = build(spec, GeneratorOptions(ignore_unused_models=False))
        generate(build_context(result), tmp_path)
        mood = (tmp_path / "models" / "mood.ts").read_text()
        assert "  'it\\'s' |" in mood
        assert "static readonly IT__S: Mood = 'it\\'s';" in mood
