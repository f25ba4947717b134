from fastapi import APIRouter, HTTPException, status

from cryptsearch.core.exceptions import ValidationError
from cryptsearch.dependencies import SettingsDep
from cryptsearch.models.schemas import DecryptRequest, DecryptResponse, ErrorResponse
from cryptsearch.services.preprocessing.limits import check_ciphertext_length
from cryptsearch.services.preprocessing.normalizer import TextNormalizer
from cryptsearch.services.scoring.scorer import EnglishScorer
from cryptsearch.services.transforms.registry import TransformRegistry

router = APIRouter()


@router.post(
    "",
    response_model=DecryptResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input or key"},
        404: {"model": ErrorResponse, "description": "Cipher family not supported"},
        500: {"model": ErrorResponse, "description": "Decryption failed"},
    },
    summary="Decrypt with a known key",
    description=(
        "Invert a cipher with a key given as a list of integers, a comma or "
        "space separated string of integers, or a keyword."
    ),
)
async def decrypt_ciphertext(
    request: DecryptRequest,
    settings: SettingsDep,
) -> DecryptResponse:
    """
    Decrypt ciphertext under a known key and score the result.

    Keywords are turned into permutations (alphabetical rank of each
    letter) for transpositions and into shifts (a=0) for Vigenere and
    Beaufort.
    """
    registry = TransformRegistry()
    transform = registry.get_transform(request.cipher_family)

    if transform is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Cipher family '{request.cipher_family.value}' is not supported",
        )

    try:
        check_ciphertext_length(request.ciphertext, settings)
        key = transform.parse_key(request.key)
        transform.validate_key(key)

        text = TextNormalizer().strip_whitespace(request.ciphertext)
        plaintext = transform.invert(text, key, request.transpose)
        scorer = EnglishScorer(
            space_bonus=settings.score_space_bonus,
            symbol_penalty=settings.score_symbol_penalty,
        )

        return DecryptResponse(
            plaintext=plaintext,
            key_used=list(key),
            score=scorer.score(plaintext),
        )

    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.message,
        )
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Decryption failed: {str(e)}",
        )
